"""CLI wiring that replays recorded build events into a snapshot file."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Optional, Sequence

from .clients.submission_client import DependencySubmissionClient
from .config import SnapshotSettings
from .errors import DependencySnapshotError
from .events_codec import read_events
from .logging_config import configure_logging
from .models.manifest import SnapshotMetadata
from .service import DependencyExtractorService
from .snapshot.builder import SnapshotBuilder
from .storage.file_writer import DependencyFileWriter
from .storage.payload import snapshot_to_payload
from .utils.env import submit_enabled

logger = logging.getLogger(__name__)


class CLIApp:
    """Replay an NDJSON event recording and write its snapshot."""

    def __init__(
        self,
        events_file: Path,
        settings: SnapshotSettings,
        *,
        submit: bool = False,
        submission_client: Optional[DependencySubmissionClient] = None,
    ) -> None:
        self._events_file = Path(events_file)
        self._settings = settings
        self._submit = submit
        self._submission_client = submission_client

    def build_service(self) -> DependencyExtractorService:
        settings = self._settings
        builder = SnapshotBuilder(
            SnapshotMetadata(
                job_name=settings.job_name,
                run_number=settings.run_number,
                sha=settings.sha,
                ref=settings.ref,
                workspace=settings.workspace,
            )
        )
        return DependencyExtractorService(
            builder, DependencyFileWriter(settings.output_dir)
        )

    def run(self) -> int:
        """Replay events, print the snapshot path and optionally submit."""
        service = self.build_service()
        count = 0
        with self._events_file.open("r", encoding="utf-8") as stream:
            for details, result in read_events(stream):
                service.finished(details, result)
                count += 1
        logger.info("Replayed %d event(s) from %s", count, self._events_file)

        path = service.close()
        print(path)

        if self._submit:
            self._submit_snapshot(service)
        return 0

    def _submit_snapshot(self, service: DependencyExtractorService) -> None:
        settings = self._settings
        client = self._submission_client or DependencySubmissionClient(
            settings.token, api_url=settings.api_url
        )
        payload = snapshot_to_payload(service.builder.build())
        response = client.submit(settings.repository or "", payload)
        print(json.dumps(response))


def build_arg_parser() -> argparse.ArgumentParser:
    argument_parser = argparse.ArgumentParser(
        prog="dependency-snapshot",
        description=(
            "Build a dependency-graph snapshot from recorded "
            "build operation events."
        ),
    )
    subparsers = argument_parser.add_subparsers(dest="command", required=True)
    replay = subparsers.add_parser(
        "replay", help="Replay an NDJSON event recording."
    )
    replay.add_argument(
        "events_file",
        type=Path,
        help="Path to the newline-delimited event recording.",
    )
    replay.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory receiving the report (default: DEPENDENCY_SNAPSHOT_DIR).",
    )
    replay.add_argument(
        "--submit",
        action="store_true",
        default=None,
        help="Upload the snapshot to the dependency submission API.",
    )
    replay.add_argument(
        "--repository",
        default=None,
        help="Target repository in owner/repo form (default: GITHUB_REPOSITORY).",
    )
    return argument_parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    configure_logging()
    parsed_args = build_arg_parser().parse_args(argv)

    try:
        settings = SnapshotSettings.from_env()
        overrides: dict[str, Any] = {}
        if parsed_args.output_dir is not None:
            overrides["output_dir"] = parsed_args.output_dir
        if parsed_args.repository is not None:
            overrides["repository"] = parsed_args.repository
        if overrides:
            settings = replace(settings, **overrides)

        submit = parsed_args.submit
        if submit is None:
            submit = submit_enabled()

        app = CLIApp(parsed_args.events_file, settings, submit=submit)
        return app.run()
    except (DependencySnapshotError, OSError) as error:
        logger.error("Dependency snapshot failed: %s", error)
        print(f"dependency-snapshot: {error}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
