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

import os
import sys

class ProgressReport(object):
    """!
    @brief Base progress report class.

    Instances are called with the number of blocks done and the block count. A call with zero
    done starts a new report, and the report finishes once done reaches the total.
    """
    def __init__(self, file=None):
        self._file = file or sys.stdout
        self.done = False
        self.last = 0

    def __call__(self, done, total):
        if done == 0:
            self._start(total)
        if total <= 0:
            fraction = 1.0
        else:
            fraction = min(done, total) / total
        if not self.done:
            self._update(done, total, fraction)
            if fraction >= 1.0:
                self.done = True
                self._finish()

    def _start(self, total):
        self.done = False
        self.last = 0

    def _update(self, done, total, fraction):
        raise NotImplementedError()

    def _finish(self):
        raise NotImplementedError()

class ProgressReportTTY(ProgressReport):
    """!
    @brief Progress bar redrawn in place, for terminals.
    """

    WIDTH = 20

    def _update(self, done, total, fraction):
        i = int(fraction * self.WIDTH)
        self._file.write("\r[%-*s] %3d%% %d/%d" % (self.WIDTH, '=' * i, round(fraction * 100), done, total))
        self._file.flush()

    def _finish(self):
        self._file.write("\n")

class ProgressReportNoTTY(ProgressReport):
    """!
    @brief Append-only progress output, one line per block, for logs and pipes.
    """

    def _update(self, done, total, fraction):
        if done:
            self._file.write("%d/%d\n" % (done, total))
            self._file.flush()

    def _finish(self):
        self._file.flush()

def print_progress(file=None):
    """!
    @brief Progress printer factory.

    Picks the TTY or non-TTY report depending on whether _file_ is a terminal.

    @param file The output file. Optional. If not provided, or if set to None, then sys.stdout
          will be used automatically.
    """
    if file is None:
        file = sys.stdout
    try:
        istty = os.isatty(file.fileno())
    except (OSError, AttributeError, ValueError):
        istty = False

    klass = ProgressReportTTY if istty else ProgressReportNoTTY
    return klass(file)
