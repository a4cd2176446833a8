"""Tests for selector bootstrap wiring."""

from __future__ import annotations

import unittest
from unittest import mock

from ssmssh.errors import ConfigurationError
from ssmssh.runtime.app import run_selector
from ssmssh.runtime.navigator import Stage
from ssmssh.ui_theme import PLAIN_THEME


class _Inventory:
    def __init__(self, profiles) -> None:
        self._profiles = profiles

    def list_profiles(self):
        if isinstance(self._profiles, Exception):
            raise self._profiles
        return self._profiles

    def list_regions(self, profile):
        return []

    def list_instances(self, profile, region):
        return []

    def fetch_tags(self, profile, region, instance_id):
        return []


class RunSelectorTests(unittest.TestCase):
    def test_profile_failure_never_touches_terminal(self) -> None:
        with mock.patch("ssmssh.runtime.app.TerminalController") as terminal_cls, mock.patch(
            "ssmssh.runtime.app.run_event_loop"
        ) as loop_mock:
            navigator = run_selector(_Inventory(ConfigurationError("no AWS profiles found")), PLAIN_THEME)

        terminal_cls.assert_not_called()
        loop_mock.assert_not_called()
        self.assertIsInstance(navigator.state.error, ConfigurationError)

    def test_loop_runs_and_dispatcher_is_shut_down(self) -> None:
        with mock.patch("ssmssh.runtime.app.TerminalController") as terminal_cls, mock.patch(
            "ssmssh.runtime.app.run_event_loop"
        ) as loop_mock, mock.patch("ssmssh.runtime.app.TaskDispatcher") as dispatcher_cls:
            navigator = run_selector(_Inventory(["default"]), PLAIN_THEME, stdin_fd=3, stdout_fd=4)

        terminal_cls.assert_called_once_with(3, 4)
        loop_mock.assert_called_once()
        dispatcher_cls.return_value.shutdown.assert_called_once_with()
        self.assertIs(navigator.state.stage, Stage.PROFILE)
        self.assertEqual(navigator.state.profiles, ("default",))

    def test_render_callback_paints_current_state(self) -> None:
        with mock.patch("ssmssh.runtime.app.TerminalController"), mock.patch(
            "ssmssh.runtime.app.run_event_loop"
        ) as loop_mock, mock.patch("ssmssh.runtime.app.TaskDispatcher"), mock.patch(
            "ssmssh.runtime.app.render_frame"
        ) as render_mock:
            run_selector(_Inventory(["default", "prod"]), PLAIN_THEME, stdin_fd=3, stdout_fd=4)
            callbacks = loop_mock.call_args.args[5]
            callbacks.render()

        rows, fd = render_mock.call_args.args
        self.assertEqual(fd, 4)
        self.assertTrue(any("> default" in row for row in rows))


if __name__ == "__main__":
    unittest.main()
