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
from functools import partial

from .options import OPTIONS_INFO

LOG = logging.getLogger(__name__)

class OptionsManager(object):
    """! @brief Layered session option lookup.

    Option values come from several sources with different priorities: keyword arguments to the
    session, `-O` command line settings, the YAML config file, and finally the defaults declared
    in OPTIONS_INFO. Each source is added as a layer; a lookup returns the value from the highest
    priority layer that has one.
    """

    def __init__(self):
        self._layers = []

    def _update_layers(self, new_options, update_operation):
        if new_options is None:
            return
        update_operation(self._convert_options(new_options))

    def add_front(self, new_options):
        """! @brief Add a new highest priority layer of option values."""
        self._update_layers(new_options, partial(self._layers.insert, 0))

    def add_back(self, new_options):
        """! @brief Add a new lowest priority layer of option values."""
        self._update_layers(new_options, self._layers.append)

    def _convert_options(self, new_options):
        """! @brief Prepare a dictionary of session options for use by the manager.

        1. Strip dictionary entries with a value of None.
        2. Replace double-underscores ("__") with a dot (".").
        3. Convert option names to all-lowercase.
        4. Warn about values whose type does not match the option's declared type.
        """
        output = {}
        for name, value in new_options.items():
            if value is None:
                continue
            name = name.replace("__", ".").lower()
            info = OPTIONS_INFO.get(name)
            if (info is not None) and not self._type_matches(info.type, value):
                LOG.warning("option '%s' has value %r of unexpected type (expected %s)",
                        name, value, info.type)
            output[name] = value
        return output

    @staticmethod
    def _type_matches(expected, value):
        # An int is an acceptable value for a float option.
        if expected is float and isinstance(value, int) and not isinstance(value, bool):
            return True
        return isinstance(value, expected)

    def is_set(self, key):
        """! @brief Return whether any layer has a value for the specified option."""
        return any(key in layer for layer in self._layers)

    def get_default(self, key):
        """! @brief Return the default value for the specified option."""
        if key in OPTIONS_INFO:
            return OPTIONS_INFO[key].default
        else:
            return None

    def get(self, key):
        """! @brief Return the highest priority value for the option, or its default."""
        for layer in self._layers:
            if key in layer:
                return layer[key]
        return self.get_default(key)

    def set(self, key, value):
        """! @brief Set an option in the current highest priority layer."""
        self.update({key: value})

    def update(self, new_options):
        """! @brief Set multiple options in the current highest priority layer."""
        if not self._layers:
            self._layers.append({})
        self._layers[0].update(self._convert_options(new_options))

    def __contains__(self, key):
        return self.is_set(key)

    def __getitem__(self, key):
        return self.get(key)

    def __setitem__(self, key, value):
        self.set(key, value)
