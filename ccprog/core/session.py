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

from __future__ import annotations

import logging
import os
import weakref
import yaml
from typing import (Any, Dict, List, Mapping, Optional, TYPE_CHECKING)

from . import exceptions
from .options_manager import OptionsManager
from ..gpio.pins import (Direction, GpioPins, PinSet, GPIO_BACKENDS)
from ..port.bit_transport import BitTransport
from ..port.debug_session import DebugSession
from ..port.protocol import CommandProtocol
from ..target.memory import XdataMemory

if TYPE_CHECKING:
    from types import TracebackType

LOG = logging.getLogger(__name__)

## @brief Set of default config filenames to search for.
_CONFIG_FILE_NAMES = [
        "ccprog.yaml",
        "ccprog.yml",
        ".ccprog.yaml",
        ".ccprog.yml",
    ]

class Session:
    """@brief Top-level object for a programming session with one target.

    The session holds the options and every object that talks to the target: the GPIO backend, the
    bit transport, the command protocol, the debug mode state machine and XDATA access. Nothing is
    kept in module globals, so independent sessions can be created side by side, for instance in
    tests.

    Opening the session exports the three GPIOs, makes them outputs and enters debug mode. Closing
    it leaves debug mode and returns the GPIOs to inputs before unexporting them. The session is a
    context manager, and closing happens on every exit path:

    @code
    with Session(gpio=SysfsGpio()) as session:
        info = identify(session.memory)
    @endcode

    Options are taken, highest priority first, from keyword arguments, the _options_ mapping, the
    YAML config file, then _option_defaults_.
    """

    ## @brief Weak reference to the most recently created session.
    _current_session: Optional[weakref.ref] = None

    ## An empty session used for options when there is no other session available.
    _options_session: Optional["Session"] = None

    @classmethod
    def get_current(cls) -> "Session":
        """@brief Return the most recently created Session instance or a default Session."""
        if cls._current_session is not None:
            session = cls._current_session()
            if session is not None:
                return session

        if cls._options_session is None:
            cls._options_session = cls(gpio=None, auto_open=False, no_config=True)
        return cls._options_session

    def __init__(
            self,
            gpio: Optional[GpioPins] = None,
            auto_open: bool = True,
            options: Optional[Mapping[str, Any]] = None,
            option_defaults: Optional[Mapping[str, Any]] = None,
            **kwargs
            ) -> None:
        """@brief Session constructor.

        @param self
        @param gpio GPIO backend instance. If None, the backend named by the 'gpio.backend' option
            is created when the session is opened.
        @param auto_open Whether to automatically open the session when used as a context manager.
        @param options Optional session options dictionary.
        @param option_defaults Optional dictionary of option values with the lowest priority.
        @param kwargs Session options passed as keyword arguments.
        """
        Session._current_session = weakref.ref(self)

        self._gpio = gpio
        self._auto_open = auto_open
        self._is_open = False
        self._exported: List[int] = []
        self._options = OptionsManager()

        self._options.add_front(kwargs)
        self._options.add_back(options)

        if self.options.get('project_dir') is None:
            self._project_dir: str = os.environ.get('CCPROG_PROJECT_DIR') or os.getcwd()
        else:
            self._project_dir = os.path.abspath(os.path.expanduser(self.options.get('project_dir')))
        LOG.debug("Project directory: %s", self.project_dir)

        self._options.add_back(self._get_config())
        self._options.add_back(option_defaults)

        self._pins = PinSet(
                reset=self.options.get('gpio.reset'),
                clock=self.options.get('gpio.clock'),
                data=self.options.get('gpio.data'))
        self._transport: Optional[BitTransport] = None
        self._protocol: Optional[CommandProtocol] = None
        self._debug: Optional[DebugSession] = None
        self._memory: Optional[XdataMemory] = None

    def _get_config(self) -> Dict[str, Any]:
        if self.options.get('no_config'):
            return {}
        config_path = self.find_user_file('config_file', _CONFIG_FILE_NAMES)
        if config_path is None:
            return {}
        try:
            with open(config_path, 'r') as config_file:
                LOG.debug("Loading config from: %s", config_path)
                config = yaml.safe_load(config_file)
        except IOError as err:
            LOG.warning("Error attempting to access config file '%s': %s", config_path, err)
            return {}
        # Allow an empty config file.
        if config is None:
            return {}
        elif not isinstance(config, dict):
            raise exceptions.Error("configuration file %s does not contain a top-level dictionary"
                    % config_path)
        return config

    def find_user_file(self, option_name: Optional[str], filename_list: List[str]) -> Optional[str]:
        """@brief Search the project directory for a file.

        If the option named _option_name_ is set, its value is used instead of searching, relative
        to the project directory if not absolute.

        @retval None No matching file was found.
        @retval string An absolute path to the requested file.
        """
        if option_name is not None:
            filename_value = self.options.get(option_name)
            if filename_value:
                path = os.path.join(self.project_dir, os.path.expanduser(filename_value))
                if not os.path.isfile(path):
                    LOG.warning("File '%s' does not exist", path)
                    return None
                return os.path.abspath(path)

        for filename in filename_list:
            path = os.path.join(self.project_dir, filename)
            if os.path.isfile(path):
                return os.path.abspath(path)
        return None

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def options(self) -> OptionsManager:
        return self._options

    @property
    def project_dir(self) -> str:
        return self._project_dir

    @property
    def log_tracebacks(self) -> bool:
        return bool(self.options.get('debug.traceback'))

    @property
    def pins(self) -> PinSet:
        return self._pins

    @property
    def gpio(self) -> Optional[GpioPins]:
        return self._gpio

    @property
    def protocol(self) -> CommandProtocol:
        assert self._protocol is not None, "session is not open"
        return self._protocol

    @property
    def debug(self) -> DebugSession:
        assert self._debug is not None, "session is not open"
        return self._debug

    @property
    def memory(self) -> XdataMemory:
        assert self._memory is not None, "session is not open"
        return self._memory

    def _create_gpio(self) -> GpioPins:
        name = self.options.get('gpio.backend')
        try:
            backend_class = GPIO_BACKENDS[name]
        except KeyError:
            raise exceptions.Error("unknown GPIO backend '%s'" % name)
        return backend_class.from_options(self.options)

    def __enter__(self) -> "Session":
        if self._auto_open:
            try:
                self.open()
            except Exception:
                self.close()
                raise
        return self

    def __exit__(self, exc_type: type, value: Any, traceback: TracebackType) -> bool:
        self.close()
        return False

    def open(self) -> None:
        """@brief Claim the GPIOs and put the target in debug mode."""
        if self._is_open:
            return
        if self._gpio is None:
            self._gpio = self._create_gpio()
        gpio = self._gpio

        self._transport = BitTransport(gpio, self._pins)
        self._protocol = CommandProtocol(self._transport, self.options.get('timeout.retries'))
        self._debug = DebugSession(gpio, self._pins, self.options.get('reset.active_high'))
        self._memory = XdataMemory(self._protocol)
        self._is_open = True

        for pin in self._pins:
            gpio.export(pin)
            self._exported.append(pin)
            gpio.set_direction(pin, Direction.OUT)

        self._debug.enter()

    def close(self) -> None:
        """@brief Release the target and return the GPIOs to a neutral state.

        Every step is attempted even if an earlier one fails. Failures are logged.
        """
        if not self._is_open:
            return
        self._is_open = False

        LOG.debug("closing session %s", self)
        if self._debug is not None:
            try:
                self._debug.leave()
            except exceptions.Error:
                LOG.error("Error leaving debug mode:", exc_info=self.log_tracebacks)

        assert self._gpio is not None
        for pin in self._exported:
            try:
                self._gpio.set_direction(pin, Direction.IN)
            except exceptions.Error:
                LOG.error("Error releasing gpio %d:", pin, exc_info=self.log_tracebacks)
            try:
                self._gpio.unexport(pin)
            except exceptions.Error:
                LOG.error("Error unexporting gpio %d:", pin, exc_info=self.log_tracebacks)
        self._exported = []
