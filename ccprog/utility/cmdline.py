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

import logging
from typing import (Any, Dict, Iterable, List)

from ..core.options import OPTIONS_INFO

LOG = logging.getLogger(__name__)

_TRUE_WORDS = ("true", "1", "yes", "on")
_BOOL_WORDS = _TRUE_WORDS + ("false", "0", "no", "off")

def convert_session_options(option_list: Iterable[str]) -> Dict[str, Any]:
    """@brief Convert a list of `name=value` session option settings to a dictionary.

    A bool option may be given without a value to set it, or with a "no-" prefix to clear it. Unknown
    options and values that cannot be converted to the option's type are logged and skipped.
    """
    options = {}
    if option_list is None:
        return options
    for o in option_list:
        if '=' in o:
            name, value = o.split('=', 1)
            name = name.strip().lower()
            value = value.strip()
        else:
            name = o.strip().lower()
            value = None

        # Check for and strip "no-" prefix before we validate the option name.
        had_no_prefix = (value is None) and name.startswith('no-')
        if had_no_prefix:
            name = name[3:]

        try:
            info = OPTIONS_INFO[name]
        except KeyError:
            LOG.warning("ignoring unknown session option '%s'", name)
            continue

        if value is None:
            if info.type is bool:
                value = not had_no_prefix
            else:
                LOG.warning("non-boolean option '%s' requires a value", name)
                continue
        elif info.type is bool:
            if value.lower() not in _BOOL_WORDS:
                LOG.warning("invalid value for option '%s'", name)
                continue
            value = value.lower() in _TRUE_WORDS
        elif info.type in (int, float):
            try:
                value = int(value, base=0) if info.type is int else float(value)
            except ValueError:
                LOG.warning("invalid value for option '%s'", name)
                continue

        options[name] = value
    return options

def convert_byte_list(values: Iterable[str]) -> List[int]:
    """@brief Convert command line integer literals to byte values.

    @exception ValueError A value is not an integer literal or does not fit in a byte.
    """
    result = []
    for v in values:
        b = int(v, base=0)
        if not (0 <= b <= 0xff):
            raise ValueError("byte value out of range: %s" % v)
        result.append(b)
    return result
