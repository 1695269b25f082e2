"""Command runner for coordinating CLI execution.

Manages logging configuration, component creation, HTTP session cleanup and
error handling for command execution.
"""

from __future__ import annotations

from typing import Sequence

import click

from PlantProxy.cli.commands import ArchiveCommand, ArchiveRequest, FieldCommand, PlantCommand
from PlantProxy.config import AppConfig
from PlantProxy.renderers import ArchiveRenderer
from PlantProxy.services import create_airtable_client, create_query_service, create_record_resolver
from PlantProxy.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution with proper resource management."""

    def __init__(self, config: AppConfig) -> None:
        """Initialize command runner.

        Args:
            config: Application configuration.
        """
        self.config = config

    def run_archive(self, action: str, request: ArchiveRequest, *, output_format: str = "html") -> str:
        """Render one archive page.

        Raises:
            click.Abort: When the command cannot run.
        """
        self._configure_logging(action)
        try:
            with create_airtable_client(self.config) as client:
                command = ArchiveCommand(
                    query_service=create_query_service(self.config, client),
                    renderer=ArchiveRenderer(),
                    base_url=self.config.archive.base_url,
                )
                return command.execute(request, output_format=output_format)
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Archive failed: %s", e)
            raise click.Abort from e

    def run_plant(self, action: str, plant_id: str, *, attachment_mode: str) -> str:
        """Resolve one plant as JSON.

        Raises:
            click.Abort: When the lookup fails.
        """
        self._configure_logging(action)
        try:
            with create_airtable_client(self.config) as client:
                command = PlantCommand(resolver=create_record_resolver(self.config, client))
                return command.execute(plant_id, attachment_mode=attachment_mode)
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Plant lookup failed: %s", e)
            raise click.Abort from e

    def run_fields(
        self,
        action: str,
        plant_id: str,
        fields: Sequence[str],
        *,
        kind: str,
        default: str,
    ) -> list[str]:
        """Render field widgets of one plant.

        Raises:
            click.Abort: When the command cannot run.
        """
        self._configure_logging(action)
        try:
            with create_airtable_client(self.config) as client:
                command = FieldCommand(resolver=create_record_resolver(self.config, client))
                return command.execute(plant_id, fields, kind=kind, default=default)
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Field rendering failed: %s", e)
            raise click.Abort from e

    def _configure_logging(self, action: str) -> None:
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )
