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

from pathlib import Path
from setuptools import (setup, find_packages)

SCRIPT_DIR = Path(__file__).parent.resolve()

# Read the version from the package without importing it.
version = {}
exec((SCRIPT_DIR / "ccprog" / "__init__.py").read_text(), version)

setup(
    name="ccprog",
    version=version["__version__"],
    description="Flash programmer for the TI CC2530 over GPIO bit-banged debug lines",
    license="Apache-2.0",
    python_requires=">=3.7",
    packages=find_packages(include=["ccprog", "ccprog.*"]),
    install_requires=[
        "colorama<1.0",
        "intelhex>=2.0,<3.0",
        "prettytable>=2.0,<4.0",
        "pyyaml>=6.0,<7.0",
    ],
    extras_require={
        "test": [
            "pytest>=6.2",
        ],
    },
    entry_points={
        "console_scripts": [
            "ccprog = ccprog.__main__:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Embedded Systems",
    ],
)
