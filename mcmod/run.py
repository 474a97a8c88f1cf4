"""
The run command: sync the project, then launch the client or server.
"""

from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Union

from .config import EulaConfig
from .eula import ensure_eula_agreed
from .project import Project
from .sync import SyncCommand
from .utils import ConsoleIO, get_logger


class Side(Enum):
    """Which side of the game to launch."""
    CLIENT = "client"
    SERVER = "server"

    @property
    def gradle_task(self) -> str:
        return "runClient" if self is Side.CLIENT else "runServer"


class RunCommand:
    """Sync the project and launch the chosen side through Gradle."""

    def __init__(
        self,
        side: Side = Side.CLIENT,
        sync: bool = False,
        eula_config: Optional[EulaConfig] = None,
        console: Optional[ConsoleIO] = None,
        sync_factory: Callable[..., SyncCommand] = SyncCommand,
        project_factory: Callable[[Union[str, Path]], Project] = Project.new_in,
    ):
        """
        Args:
            side: Side to launch
            sync: Run a full sync instead of an incremental one
            eula_config: EULA settings, read from the environment if None
            console: Console used by the EULA prompt
            sync_factory: Builds the sync step from its ``incremental`` flag
            project_factory: Loads the project from a directory
        """
        self.side = side
        self.sync = sync
        self.eula_config = eula_config
        self.console = console
        self.sync_factory = sync_factory
        self.project_factory = project_factory
        self.logger = get_logger()

    async def run(self, directory: Union[str, Path]) -> None:
        """
        Run every step in order; the first failure aborts the rest.

        Raises:
            McmodError: On sync, project, EULA or Gradle failure
            OSError: On I/O failure
        """
        sync = self.sync_factory(incremental=not self.sync)
        await sync.run(directory)

        project = self.project_factory(directory)
        self.logger.info(f"Launching {self.side.value} for {project.root}")

        if self.side is Side.SERVER:
            await ensure_eula_agreed(project, self.eula_config, self.console)

        await project.run_gradlew([self.side.gradle_task])
