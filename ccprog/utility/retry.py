# ccprog CC2530 flash programmer
# Copyright (c) 2026 The ccprog authors
# SPDX-License-Identifier: Apache-2.0
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from time import sleep

class RetryBudget(object):
    """! @brief Bounded iteration budget for busy-wait loops.

    Every busy wait against the target is bounded by a number of iterations rather than by wall
    clock time, since each iteration costs at least one round trip over the wire. The loop body
    must use a break statement to exit in the successful case, and the else block of the loop
    handles the exhausted budget.

    @code
    with RetryBudget(1000) as budget:
        while budget.check():
            if not is_busy():
                break
        else:
            raise exceptions.TimeoutError("still busy", retries=budget.retries)
    @endcode

    check() returns True exactly _retries_ times, so the loop body runs at most that many times.

    If a non-zero _sleeptime_ is passed to the constructor, check() sleeps before returning
    starting with the second call, unless `autosleep=False` is passed.
    """

    def __init__(self, retries, sleeptime=0):
        """! @brief Constructor.
        @param self
        @param retries Maximum number of iterations. Must not be negative.
        @param sleeptime Time in seconds to sleep during calls to check(). Defaults to 0, thus
            check() will not sleep unless you pass a different value.
        """
        if retries < 0:
            raise ValueError("retry budget must not be negative")
        self._retries = retries
        self._sleeptime = sleeptime
        self._used = 0
        self._exhausted = False

    def __enter__(self):
        self._used = 0
        self._exhausted = False
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        pass

    def check(self, autosleep=True):
        """! @brief Consume one iteration from the budget and possibly sleep.

        @param self
        @param autosleep Whether to sleep if the budget is not yet exhausted. The sleeptime passed
            to the constructor must have been non-zero.
        @retval True Another iteration is allowed.
        @retval False The budget is exhausted and the loop should be exited.
        """
        if self._used >= self._retries:
            self._exhausted = True
            return False
        if self._used and autosleep and self._sleeptime:
            sleep(self._sleeptime)
        self._used += 1
        return True

    @property
    def retries(self):
        """! @brief The total budget."""
        return self._retries

    @property
    def used(self):
        """! @brief Number of iterations consumed so far."""
        return self._used

    @property
    def did_time_out(self):
        """! @brief Whether check() has reported an exhausted budget."""
        return self._exhausted
