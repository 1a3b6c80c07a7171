"""
setup.py

playbook - plain-text sales playbook to paginated HTML

Copyright 2024 Soil Seed & Water

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import re
from typing import List, Optional, Union

from setuptools import find_packages, setup


def load_requirements(file_list: Optional[Union[str, List[str]]] = None) -> List[str]:
    if file_list is None:
        file_list = ["requirements/base.in"]
    if isinstance(file_list, str):
        file_list = [file_list]
    requirements: List[str] = []
    for file in file_list:
        with open(file, encoding="utf-8") as f:
            requirements.extend(line.strip() for line in f.readlines())
    requirements = [
        req for req in requirements if req and not req.startswith("#") and not req.startswith("-")
    ]
    return requirements


def load_version() -> str:
    # -- read without importing the package, its dependencies are not installed yet --
    with open("playbook/__version__.py", encoding="utf-8") as f:
        match = re.search(r'^__version__ = "([^"]+)"', f.read(), re.MULTILINE)
    if match is None:
        raise RuntimeError("Unable to find __version__ in playbook/__version__.py")
    return match.group(1)


setup(
    name="playbook",
    description="Parses a plain-text sales playbook and renders it as paginated HTML.",
    long_description=open("README.md", encoding="utf-8").read(),  # noqa: SIM115
    long_description_content_type="text/markdown",
    keywords="playbook text parsing HTML rendering",
    python_requires=">=3.9.0",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Text Processing :: Markup :: HTML",
    ],
    license="Apache-2.0",
    packages=find_packages(exclude=["test_playbook", "test_playbook.*"]),
    version=load_version(),
    install_requires=load_requirements(),
    extras_require={
        "test": load_requirements("requirements/test.in"),
    },
    entry_points={
        "console_scripts": ["playbook-render=playbook.cli:main"],
    },
    package_dir={"playbook": "playbook"},
    package_data={"playbook": ["py.typed"]},
)
