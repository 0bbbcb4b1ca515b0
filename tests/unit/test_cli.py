import pytest
from click.testing import CliRunner

from thunder_rediscloud.lib.cli.cli import cli
from thunder_rediscloud.lib.rediscloud import ConfigurationError
from thunder_rediscloud.lib.rediscloud.client import RedisCloudClient
from .helpers import make_database


@pytest.fixture
def api(mocker):
    api = mocker.MagicMock(name="RedisCloudClient")
    api.__enter__.return_value = api
    mocker.patch.object(RedisCloudClient, "from_env", return_value=api)
    return api


def test_list_databases(api):
    api.database.list.return_value = [
        make_database(51),
        make_database(52, name="cache"),
        make_database(53, protocol="memcached"),
    ]

    result = CliRunner().invoke(cli, ["list-databases", "--subscription-id", "1234", "--protocol", "redis"])

    assert result.exit_code == 0, result.output
    assert "Databases: 2" in result.output
    api.database.list.assert_called_once_with(1234)


def test_show_database_by_name(api, full_database):
    api.database.list.return_value = [make_database(51), make_database(52, name="cache")]
    api.database.get.return_value = full_database

    result = CliRunner().invoke(cli, ["show-database", "--subscription-id", "1234", "--name", "sessions"])

    assert result.exit_code == 0, result.output
    assert full_database.public_endpoint in result.output
    api.database.get.assert_called_once_with(1234, 51)


def test_show_database_requires_an_identifier(api):
    result = CliRunner().invoke(cli, ["show-database", "--subscription-id", "1234"])

    assert result.exit_code != 0
    api.database.get.assert_not_called()


def test_show_database_unknown_name(api):
    api.database.list.return_value = []

    result = CliRunner().invoke(cli, ["show-database", "--subscription-id", "1234", "--name", "sessions"])

    assert result.exit_code == 1
    assert "found 0" in result.output


def test_wait_database(api):
    api.database.get.return_value = make_database(51, status="active")

    result = CliRunner().invoke(cli, ["wait-database", "--subscription-id", "1234", "--id", "51", "--interval", "0"])

    assert result.exit_code == 0, result.output
    assert "51 is active" in result.output


def test_wait_database_failed(api):
    api.database.get.return_value = make_database(51, status="error")

    result = CliRunner().invoke(cli, ["wait-database", "--subscription-id", "1234", "--id", "51", "--interval", "0"])

    assert result.exit_code == 1
    assert "error" in result.output


def test_missing_credentials(mocker):
    mocker.patch.object(RedisCloudClient, "from_env", side_effect=ConfigurationError("credentials missing"))

    result = CliRunner().invoke(cli, ["list-databases", "--subscription-id", "1234"])

    assert result.exit_code == 1
    assert "credentials missing" in result.output
