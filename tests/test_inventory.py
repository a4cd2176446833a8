"""Tests for AWS inventory lookups.

Profile discovery reads temporary INI files; ``aws`` invocations are replaced
with canned ``CompletedProcess`` results.
"""

from __future__ import annotations

import io
import json
import subprocess
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from ssmssh.errors import ConfigurationError, InventoryLookupError, SessionError
from ssmssh.inventory import AwsInventory, Tag


def _completed(payload=None, returncode=0, stderr="", stdout=None):
    if stdout is None:
        stdout = json.dumps(payload if payload is not None else {})
    return subprocess.CompletedProcess(args=["aws"], returncode=returncode, stdout=stdout, stderr=stderr)


class ProfileDiscoveryTests(unittest.TestCase):
    def _inventory(self, tmp: str, credentials: str | None, config: str | None) -> AwsInventory:
        root = Path(tmp)
        credentials_path = root / "credentials"
        config_path = root / "config"
        if credentials is not None:
            credentials_path.write_text(credentials, encoding="utf-8")
        if config is not None:
            config_path.write_text(config, encoding="utf-8")
        return AwsInventory(credentials_path=credentials_path, config_path=config_path)

    def test_lists_credentials_sections_in_file_order(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            inventory = self._inventory(
                tmp,
                "[default]\naws_access_key_id = a\n\n[prod]\naws_access_key_id = b\n",
                None,
            )
            self.assertEqual(inventory.list_profiles(), ["default", "prod"])

    def test_merges_config_profiles_without_duplicates(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            inventory = self._inventory(
                tmp,
                "[prod]\naws_access_key_id = b\n",
                "[default]\nregion = us-east-1\n[profile prod]\nregion = us-west-2\n"
                "[profile sso-dev]\nsso_start_url = https://example.invalid\n[sso-session corp]\n",
            )
            self.assertEqual(inventory.list_profiles(), ["prod", "default", "sso-dev"])

    def test_no_profiles_raises_configuration_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            inventory = self._inventory(tmp, None, None)
            with self.assertRaises(ConfigurationError):
                inventory.list_profiles()

    def test_malformed_file_is_skipped(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            inventory = self._inventory(tmp, "not an ini file\n", "[profile ops]\n")
            self.assertEqual(inventory.list_profiles(), ["ops"])


class AwsLookupTests(unittest.TestCase):
    def setUp(self) -> None:
        self.inventory = AwsInventory("aws", discovery_region="us-west-2")

    def test_list_regions_uses_discovery_region(self) -> None:
        payload = {"Regions": [{"RegionName": "us-east-1"}, {"RegionName": "eu-west-1"}, {}]}
        with mock.patch("ssmssh.inventory.subprocess.run", return_value=_completed(payload)) as run_mock:
            regions = self.inventory.list_regions("prod")

        self.assertEqual(regions, ["us-east-1", "eu-west-1"])
        command = run_mock.call_args.args[0]
        self.assertEqual(
            command,
            [
                "aws",
                "ec2",
                "describe-regions",
                "--profile",
                "prod",
                "--region",
                "us-west-2",
                "--output",
                "json",
            ],
        )

    def test_list_instances_formats_name_tag(self) -> None:
        payload = {
            "Reservations": [
                {
                    "Instances": [
                        {"InstanceId": "i-1", "Tags": [{"Key": "env", "Value": "prod"}, {"Key": "Name", "Value": "web"}]},
                        {"InstanceId": "i-2"},
                    ]
                },
                {"Instances": [{"InstanceId": "i-3", "Tags": [{"Key": "Name", "Value": ""}]}]},
            ]
        }
        with mock.patch("ssmssh.inventory.subprocess.run", return_value=_completed(payload)):
            instances = self.inventory.list_instances("prod", "us-east-1")

        self.assertEqual(instances, ["i-1 (web)", "i-2", "i-3"])

    def test_fetch_tags_collects_every_tag(self) -> None:
        payload = {
            "Reservations": [
                {"Instances": [{"InstanceId": "i-1", "Tags": [{"Key": "Name", "Value": "web"}, {"Key": "team", "Value": "ops"}]}]}
            ]
        }
        with mock.patch("ssmssh.inventory.subprocess.run", return_value=_completed(payload)) as run_mock:
            tags = self.inventory.fetch_tags("prod", "us-east-1", "i-1")

        self.assertEqual(tags, [Tag("Name", "web"), Tag("team", "ops")])
        self.assertIn("--instance-ids", run_mock.call_args.args[0])
        self.assertIn("i-1", run_mock.call_args.args[0])

    def test_fetch_tags_for_untagged_instance_is_empty(self) -> None:
        payload = {"Reservations": [{"Instances": [{"InstanceId": "i-1"}]}]}
        with mock.patch("ssmssh.inventory.subprocess.run", return_value=_completed(payload)):
            self.assertEqual(self.inventory.fetch_tags("prod", "us-east-1", "i-1"), [])

    def test_non_zero_exit_raises_with_stderr(self) -> None:
        failed = _completed(returncode=255, stderr="An error occurred (UnauthorizedOperation)")
        with mock.patch("ssmssh.inventory.subprocess.run", return_value=failed):
            with self.assertRaises(InventoryLookupError) as ctx:
                self.inventory.list_regions("prod")

        self.assertIn("UnauthorizedOperation", str(ctx.exception))

    def test_missing_cli_raises_lookup_error(self) -> None:
        with mock.patch("ssmssh.inventory.subprocess.run", side_effect=FileNotFoundError("aws")):
            with self.assertRaises(InventoryLookupError):
                self.inventory.list_instances("prod", "us-east-1")

    def test_malformed_json_raises_lookup_error(self) -> None:
        with mock.patch("ssmssh.inventory.subprocess.run", return_value=_completed(stdout="{not json")):
            with self.assertRaises(InventoryLookupError):
                self.inventory.list_regions("prod")


class SessionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.inventory = AwsInventory("aws")

    def test_session_command_targets_instance(self) -> None:
        self.assertEqual(
            self.inventory.session_command("prod", "us-west-2", "i-2"),
            ["aws", "ssm", "start-session", "--profile", "prod", "--region", "us-west-2", "--target", "i-2"],
        )

    def test_start_session_announces_and_runs_command(self) -> None:
        with mock.patch("ssmssh.inventory.subprocess.call", return_value=0) as call_mock, mock.patch(
            "ssmssh.inventory.sys.stdout", new_callable=io.StringIO
        ) as stdout:
            self.assertEqual(self.inventory.start_session("prod", "us-west-2", "i-2"), 0)

        call_mock.assert_called_once_with(self.inventory.session_command("prod", "us-west-2", "i-2"))
        self.assertIn("Running: aws ssm start-session --profile prod", stdout.getvalue())

    def test_start_session_failure_raises_session_error(self) -> None:
        with mock.patch("ssmssh.inventory.subprocess.call", return_value=255), mock.patch(
            "ssmssh.inventory.sys.stdout", new_callable=io.StringIO
        ):
            with self.assertRaises(SessionError):
                self.inventory.start_session("prod", "us-west-2", "i-2")


if __name__ == "__main__":
    unittest.main()
