"""hyprctl gateway for querying and driving the compositor.

This is the only place the session manager talks to Hyprland. Everything
else depends on the `CommandGateway` protocol, so tests can substitute an
in-memory compositor.

Provides:
- Raw command execution (`HyprctlGateway.execute`)
- Single dispatch directives
- One-shot `--batch` dispatch of many directives
"""

import asyncio
import logging
import shlex
from typing import Protocol

from ..cli.logging_config import log_hyprctl_call
from .errors import GatewayError
from .models import Directive, DirectiveBatch


logger = logging.getLogger(__name__)


class CommandGateway(Protocol):
    """Anything that can run a hyprctl command and return its stdout."""

    async def execute(self, command: str) -> str:
        ...


class HyprctlGateway:
    """Runs hyprctl as a subprocess.

    Each call is a single attempt: the calling task is suspended until hyprctl
    exits. A nonzero exit status or failure to spawn raises GatewayError.
    """

    def __init__(self, binary: str = "hyprctl"):
        """Initialize the gateway.

        Args:
            binary: hyprctl executable name or path
        """
        self.binary = binary

    async def execute(self, command: str) -> str:
        """Run `hyprctl <command>` and return stdout.

        Args:
            command: Arguments for hyprctl, shell-quoted where needed
                (e.g. "clients -j" or "--batch 'dispatch ... ; dispatch ...'")

        Returns:
            Decoded standard output

        Raises:
            GatewayError: If hyprctl cannot be spawned or exits nonzero
        """
        args = shlex.split(command)

        try:
            proc = await asyncio.create_subprocess_exec(
                self.binary,
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout, stderr = await proc.communicate()
        except OSError as e:
            logger.error(f"Failed to spawn {self.binary}: {e}")
            raise GatewayError(command, str(e)) from e

        output = stdout.decode("utf-8", errors="replace")
        errors = stderr.decode("utf-8", errors="replace")
        log_hyprctl_call(args, proc.returncode, output, errors, logger)

        if proc.returncode != 0:
            raise GatewayError(command, f"exit status {proc.returncode}", errors)

        return output


async def dispatch(gateway: CommandGateway, directive: Directive) -> str:
    """Send a single dispatch directive."""
    return await gateway.execute(directive.to_hyprctl())


async def dispatch_batch(gateway: CommandGateway, batch: DirectiveBatch) -> str:
    """Send all directives of a batch as one `hyprctl --batch` invocation.

    Hyprland applies the directives back to back, so the user never sees the
    intermediate states.

    Raises:
        ValueError: If the batch is empty
    """
    if not batch.directives:
        raise ValueError("Cannot dispatch an empty batch")

    argument = batch.to_batch_argument()
    logger.debug(f"Dispatching batch of {len(batch)} directives")
    return await gateway.execute(f"--batch {shlex.quote(argument)}")
