"""Remote session launcher (plain ssh subprocess)."""

import shlex
import subprocess
from dataclasses import dataclass
from typing import Optional

from rich.console import Console
from rich.markup import escape

from ..core import get_logger

logger = get_logger("session")


@dataclass(frozen=True)
class SessionResult:
    exit_code: int
    signal: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class RemoteSessionLauncher:
    def __init__(self, executable: str = "ssh", console: Optional[Console] = None):
        self.executable = executable
        self.console = console or Console()

    def build_command(
        self, host: str, user: Optional[str] = None, key_file: Optional[str] = None
    ) -> list[str]:
        if not host:
            raise ValueError("Instance has no reachable hostname or IP address")
        cmd = [self.executable]
        if key_file:
            cmd += ["-i", key_file]
        cmd.append(f"{user}@{host}" if user else host)
        return cmd

    def launch(
        self, host: str, user: Optional[str] = None, key_file: Optional[str] = None
    ) -> SessionResult:
        """Run ssh attached to the terminal and report how it ended"""
        cmd = self.build_command(host, user, key_file)
        self.console.print(f"Executing: [yellow]{escape(shlex.join(cmd))}[/]")
        proc = subprocess.run(cmd)
        logger.debug("%s exited with %s", self.executable, proc.returncode)
        if proc.returncode < 0:
            # Killed by a signal; report it the way a shell would
            return SessionResult(128 - proc.returncode, signal=-proc.returncode)
        return SessionResult(proc.returncode)
