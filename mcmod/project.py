"""
Project discovery and Gradle wrapper invocation.
"""

import asyncio
import os
from pathlib import Path
from typing import Sequence, Union

from .config import CONFIG_FILE_NAME, ProjectConfig, load_project_config
from .errors import BuildToolError, ProjectError
from .utils import get_logger


class Project:
    """A mod project and its Forge workspace."""

    def __init__(self, config: ProjectConfig):
        self.config = config
        self.logger = get_logger()

    @classmethod
    def new_in(cls, directory: Union[str, Path]) -> 'Project':
        """
        Load the project rooted at directory.

        Raises:
            ProjectError: If no project is found there
            ConfigError: If the project configuration is invalid
        """
        root = Path(directory).expanduser().resolve()
        if not root.is_dir():
            raise ProjectError(f"Project directory does not exist: {root}")
        if not (root / CONFIG_FILE_NAME).is_file():
            raise ProjectError(f"No {CONFIG_FILE_NAME} found in {root}")
        return cls(load_project_config(root))

    @property
    def root(self) -> Path:
        return self.config.root

    def forge_root(self) -> Path:
        """Path to the Forge workspace holding the Gradle build."""
        return self.config.forge_root

    def gradlew_path(self) -> Path:
        """Path to the Gradle wrapper script."""
        name = "gradlew.bat" if os.name == "nt" else "gradlew"
        return self.forge_root() / name

    async def run_gradlew(self, args: Sequence[str]) -> None:
        """
        Run the Gradle wrapper with args and wait for it to exit.

        Output is not captured; the process inherits our terminal.

        Raises:
            BuildToolError: If the wrapper is missing, fails to spawn or exits non-zero
        """
        gradlew = self.gradlew_path()
        if not gradlew.is_file():
            raise BuildToolError(f"Gradle wrapper not found: {gradlew}")

        cmd = [str(gradlew), *args]
        self.logger.info(f"Running: {' '.join(cmd)}")

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                cwd=self.forge_root(),
            )
        except OSError as e:
            raise BuildToolError(f"Failed to start Gradle wrapper: {e}")

        exit_code = await process.wait()
        if exit_code != 0:
            self.logger.error(f"Gradle exited with code {exit_code}")
            raise BuildToolError(
                f"Gradle task {' '.join(args)} failed with exit code {exit_code}",
                exit_code=exit_code,
            )

        self.logger.info(f"Gradle task {' '.join(args)} finished")
