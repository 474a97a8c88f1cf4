"""
EULA agreement gate run before launching a server.

The agreement is persisted as a line ``eula=true`` in run/eula.txt inside
the Forge workspace, the file the Minecraft server itself checks.
"""

from pathlib import Path
from typing import Optional

from .config import EULA_ENV_VAR, EulaConfig
from .errors import EulaNotAgreed
from .project import Project
from .utils import ConsoleIO, get_logger


EULA_URL = "https://account.mojang.com/documents/minecraft_eula"
EULA_ACCEPTED_LINE = "eula=true"
EULA_PROMPT = "Do you want to agree to the EULA? (y/N) "


def eula_path(project: Project) -> Path:
    """Path to the server's eula.txt."""
    return project.forge_root() / "run" / "eula.txt"


def is_eula_accepted(path: Path) -> bool:
    """Check whether the file at path holds an accepting line."""
    if not path.exists():
        return False

    try:
        content = path.read_bytes().decode('utf-8')
    except UnicodeDecodeError as e:
        raise OSError(f"Could not read {path}: not valid UTF-8 ({e})")

    # Lines end at \n only; a trailing \r is removed by strip()
    return any(line.strip() == EULA_ACCEPTED_LINE for line in content.split('\n'))


async def ensure_eula_agreed(
    project: Project,
    config: Optional[EulaConfig] = None,
    console: Optional[ConsoleIO] = None,
) -> None:
    """
    Make sure the EULA has been agreed to, asking the user if needed.

    Args:
        project: Project whose server is about to run
        config: EULA configuration (read from the environment if None)
        console: Where to print notices and read the answer

    Raises:
        EulaNotAgreed: If the user does not answer "y"
        OSError: If eula.txt cannot be read or written
    """
    logger = get_logger()
    config = config or EulaConfig.from_env()
    console = console or ConsoleIO()

    path = eula_path(project)
    if is_eula_accepted(path):
        logger.debug(f"EULA already agreed in {path}")
        return

    if config.auto_agree:
        console.write_line(
            f"Automatically agreeing to EULA to run the server (because {EULA_ENV_VAR} is set)"
        )
        console.write_line(f"Please read the EULA at {EULA_URL}")
        logger.info("EULA auto-agreed via environment")
    else:
        console.write_line("Agreeing to the EULA is required to launch the server")
        console.write_line(f"Please read the EULA at {EULA_URL}")
        console.write_line(
            f"You can set {EULA_ENV_VAR}=true to automatically agree to the EULA"
        )
        answer = console.prompt(EULA_PROMPT)
        if answer is None or answer.strip().lower() != "y":
            logger.info("EULA not agreed, aborting")
            raise EulaNotAgreed("EULA not agreed")
        logger.info("EULA agreed interactively")

    # The run/ directory is not created here; a missing one is an error
    with open(path, 'wb') as f:
        f.write(EULA_ACCEPTED_LINE.encode('utf-8'))
    logger.info(f"Wrote {path}")
