"""ABOUTME: Unit tests for CLI commands with mocked dependencies
ABOUTME: Tests command parsing, output formatting, and error handling without a database"""

from unittest.mock import Mock, patch

from click.testing import CliRunner

from planit.adapters.database import start_mappers
from planit.domain.errors import ErrorKind, PlanItError
from planit.domain.result import Err, Ok
from planit.domain.users import User
from planit.entrypoints.cli import cli


class TestCliUsers:
    """Test user management CLI commands."""

    def setup_method(self) -> None:
        self.runner = CliRunner()
        # Map User before building the instance, as cli() maps it on invoke
        start_mappers()
        self.mock_user = User(
            username="tester",
            name="Test",
            email="test@example.com",
            password_hash="hashed_password",
            user_id=7,
        )

    @patch("planit.entrypoints.cli.users.get_uow")
    @patch("planit.entrypoints.cli.users.register_user")
    def test_add_user_success(self, mock_register_user, mock_get_uow):
        """Test successful user creation."""
        mock_register_user.return_value = Ok(self.mock_user)

        result = self.runner.invoke(
            cli,
            ["users", "add", "--username", "tester", "--name", "Test", "--email", "test@example.com"]
            + ["--password", "Passw0rd!"],
            obj={"session_factory": Mock()},
        )

        assert result.exit_code == 0, result.output
        assert "✓ User created successfully:" in result.output
        assert "ID: 7" in result.output
        assert "Username: tester" in result.output
        register_input = mock_register_user.call_args.args[1]
        assert register_input.password == "Passw0rd!"

    @patch("planit.entrypoints.cli.users.get_uow")
    @patch("planit.entrypoints.cli.users.register_user")
    def test_add_user_failure(self, mock_register_user, mock_get_uow):
        """Test that a failed registration prints the error and aborts."""
        mock_register_user.return_value = Err(PlanItError.of(ErrorKind.EXISTING_USERNAME))

        result = self.runner.invoke(
            cli,
            ["users", "add", "--username", "tester", "--name", "Test", "--email", "test@example.com"]
            + ["--password", "Passw0rd!"],
            obj={"session_factory": Mock()},
        )

        assert result.exit_code == 1
        assert "✗ Error: Username is already being used." in result.output

    def test_add_user_requires_username(self):
        result = self.runner.invoke(cli, ["users", "add", "--name", "Test", "--email", "test@example.com"])

        assert result.exit_code == 2
        assert "--username" in result.output


class TestCliDatabase:
    def setup_method(self) -> None:
        self.runner = CliRunner()

    @patch("planit.entrypoints.cli.database.create_tables")
    def test_init(self, mock_create_tables):
        session_factory = Mock()

        result = self.runner.invoke(cli, ["database", "init"], obj={"session_factory": session_factory})

        assert result.exit_code == 0
        mock_create_tables.assert_called_once_with(session_factory)

    @patch("planit.entrypoints.cli.database.drop_tables")
    def test_reset_refused_without_flag(self, mock_drop_tables, clear_env_vars):
        clear_env_vars("ALLOW_RESET_DB")

        result = self.runner.invoke(cli, ["database", "reset"], obj={"session_factory": Mock()})

        assert "ALLOW_RESET_DB" in result.output
        mock_drop_tables.assert_not_called()


def test_version():
    result = CliRunner().invoke(cli, ["version"])

    assert result.exit_code == 0
    assert result.output == "PlanIt 0.0.1\n"
