"""AWS inventory lookups backed by the ``aws`` command-line tool.

Profiles come from the local credentials/config INI files. Regions, instances,
and tags come from ``aws ec2`` JSON output. The session hand-off runs
``aws ssm start-session`` attached to the operator's terminal.
"""

from __future__ import annotations

import configparser
import json
import logging
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigurationError, InventoryLookupError, SessionError
from .filtering import format_instance_entry

logger = logging.getLogger(__name__)

DEFAULT_CREDENTIALS_PATH = Path.home() / ".aws" / "credentials"
DEFAULT_AWS_CONFIG_PATH = Path.home() / ".aws" / "config"
DEFAULT_DISCOVERY_REGION = "us-west-2"
_STDERR_TAIL_CHARS = 400


@dataclass(frozen=True)
class Tag:
    key: str
    value: str


def _read_ini_sections(path: Path) -> list[str]:
    parser = configparser.ConfigParser(interpolation=None, strict=False)
    try:
        with path.open(encoding="utf-8") as handle:
            parser.read_file(handle)
    except FileNotFoundError:
        return []
    except (OSError, UnicodeDecodeError, configparser.Error) as exc:
        logger.warning("ignoring unreadable AWS file %s: %s", path, exc)
        return []
    return parser.sections()


def _stderr_tail(text: str | None) -> str:
    tail = (text or "").strip()
    if len(tail) > _STDERR_TAIL_CHARS:
        tail = "..." + tail[-_STDERR_TAIL_CHARS:]
    return tail


def _parse_tags(raw_tags: object) -> list[Tag]:
    if not isinstance(raw_tags, list):
        return []
    tags: list[Tag] = []
    for raw in raw_tags:
        if not isinstance(raw, dict):
            continue
        tags.append(Tag(key=str(raw.get("Key", "")), value=str(raw.get("Value", ""))))
    return tags


def _iter_instances(payload: dict) -> list[dict]:
    instances: list[dict] = []
    for reservation in payload.get("Reservations") or []:
        if not isinstance(reservation, dict):
            continue
        for instance in reservation.get("Instances") or []:
            if isinstance(instance, dict):
                instances.append(instance)
    return instances


class AwsInventory:
    """Inventory source and session launcher for one ``aws`` executable."""

    def __init__(
        self,
        aws_cli: str = "aws",
        *,
        credentials_path: Path = DEFAULT_CREDENTIALS_PATH,
        config_path: Path = DEFAULT_AWS_CONFIG_PATH,
        discovery_region: str = DEFAULT_DISCOVERY_REGION,
        command_timeout: float | None = None,
    ) -> None:
        self.aws_cli = aws_cli
        self.credentials_path = credentials_path
        self.config_path = config_path
        self.discovery_region = discovery_region
        self.command_timeout = command_timeout

    def list_profiles(self) -> list[str]:
        """Return profile names from credentials then config, first-seen order.

        Raises ``ConfigurationError`` when neither file yields a profile.
        """
        profiles: list[str] = []
        seen: set[str] = set()

        def add(name: str) -> None:
            name = name.strip()
            if name and name not in seen:
                seen.add(name)
                profiles.append(name)

        for section in _read_ini_sections(self.credentials_path):
            if section != "DEFAULT":
                add(section)
        for section in _read_ini_sections(self.config_path):
            if section == "default":
                add(section)
            elif section.startswith("profile "):
                add(section[len("profile "):])

        if not profiles:
            raise ConfigurationError(
                f"no AWS profiles found in {self.credentials_path} or {self.config_path}"
            )
        return profiles

    def _run_json(self, args: list[str]) -> dict:
        command = [self.aws_cli, *args, "--output", "json"]
        logger.debug("running %s", " ".join(command))
        try:
            proc = subprocess.run(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
                timeout=self.command_timeout,
            )
        except FileNotFoundError as exc:
            raise InventoryLookupError(f"{self.aws_cli}: command not found") from exc
        except subprocess.TimeoutExpired as exc:
            raise InventoryLookupError(f"{' '.join(args[:2])} did not finish in time") from exc
        if proc.returncode != 0:
            detail = _stderr_tail(proc.stderr) or f"exit status {proc.returncode}"
            raise InventoryLookupError(f"{' '.join(args[:2])} failed: {detail}")
        try:
            payload = json.loads(proc.stdout or "{}")
        except json.JSONDecodeError as exc:
            raise InventoryLookupError(f"{' '.join(args[:2])} returned malformed JSON") from exc
        if not isinstance(payload, dict):
            raise InventoryLookupError(f"{' '.join(args[:2])} returned unexpected JSON")
        return payload

    def list_regions(self, profile: str) -> list[str]:
        payload = self._run_json(
            ["ec2", "describe-regions", "--profile", profile, "--region", self.discovery_region]
        )
        regions: list[str] = []
        for raw in payload.get("Regions") or []:
            if isinstance(raw, dict) and raw.get("RegionName"):
                regions.append(str(raw["RegionName"]))
        return regions

    def list_instances(self, profile: str, region: str) -> list[str]:
        """Return one display entry per instance, ``"<id> (<Name tag>)"`` or ``"<id>"``."""
        payload = self._run_json(
            ["ec2", "describe-instances", "--profile", profile, "--region", region]
        )
        entries: list[str] = []
        for instance in _iter_instances(payload):
            instance_id = instance.get("InstanceId")
            if not instance_id:
                continue
            name = ""
            for tag in _parse_tags(instance.get("Tags")):
                if tag.key == "Name":
                    name = tag.value
            entries.append(format_instance_entry(str(instance_id), name))
        return entries

    def fetch_tags(self, profile: str, region: str, instance_id: str) -> list[Tag]:
        payload = self._run_json(
            [
                "ec2",
                "describe-instances",
                "--profile",
                profile,
                "--region",
                region,
                "--instance-ids",
                instance_id,
            ]
        )
        tags: list[Tag] = []
        for instance in _iter_instances(payload):
            tags.extend(_parse_tags(instance.get("Tags")))
        return tags

    def session_command(self, profile: str, region: str, instance_id: str) -> list[str]:
        return [
            self.aws_cli,
            "ssm",
            "start-session",
            "--profile",
            profile,
            "--region",
            region,
            "--target",
            instance_id,
        ]

    def start_session(self, profile: str, region: str, instance_id: str) -> int:
        """Run the SSM session attached to this terminal and wait for it to end."""
        command = self.session_command(profile, region, instance_id)
        sys.stdout.write(f"Running: {' '.join(command)}\n")
        sys.stdout.flush()
        logger.info("starting session: %s", " ".join(command))
        try:
            returncode = subprocess.call(command)
        except FileNotFoundError as exc:
            raise SessionError(f"{self.aws_cli}: command not found") from exc
        if returncode != 0:
            raise SessionError(f"session exited with status {returncode}")
        return returncode


__all__ = [
    "Tag",
    "AwsInventory",
    "DEFAULT_CREDENTIALS_PATH",
    "DEFAULT_AWS_CONFIG_PATH",
    "DEFAULT_DISCOVERY_REGION",
]
