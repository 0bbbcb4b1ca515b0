import logging

import click
from click_option_group import optgroup, RequiredMutuallyExclusiveOptionGroup

from thunder_rediscloud.lib.rediscloud import OperationContext, RedisCloudError
from thunder_rediscloud.lib.rediscloud.client import RedisCloudClient
from thunder_rediscloud.lib.rediscloud.database import (
    by_name,
    by_protocol,
    filter_databases,
    observe,
    wait_for_database_to_be_active,
)


def echo_key_value(key, value):
    click.echo(click.style(f"{key}: ", fg="green", bold=True) + str(value))


def echo_database(database):
    observed = observe(database)

    echo_key_value("Database ID", observed.database_id)
    echo_key_value("Name", observed.name)
    echo_key_value("Status", observed.status)
    echo_key_value("Protocol", observed.protocol)
    echo_key_value("Memory Limit (GB)", observed.memory_limit_in_gb)
    echo_key_value(
        "Throughput",
        f"{observed.throughput_measurement_value} ({observed.throughput_measurement_by})",
    )
    echo_key_value("Public Endpoint", observed.public_endpoint)
    echo_key_value("Private Endpoint", observed.private_endpoint)
    if observed.replica_of:
        echo_key_value("Replica Of", ", ".join(observed.replica_of))
    if observed.hashing_policy:
        echo_key_value("Hashing Policy", ", ".join(observed.hashing_policy))


@click.group()
@click.option("--debug", is_flag=True, default=False, help="Enable DEBUG logging")
@click.pass_context
def cli(ctx, debug):
    logging.basicConfig(format="[%(asctime)s %(levelname)s %(name)s %(threadName)s]: %(message)s")

    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        click.echo("Enabled debug mode!")

    try:
        ctx.obj = ctx.with_resource(RedisCloudClient.from_env())
    except RedisCloudError as e:
        raise click.ClickException(str(e))


@cli.command()
@click.option("--subscription-id", required=True, type=int, help="Subscription ID")
@click.option("--name", help="Only list databases with this name")
@click.option("--protocol", type=click.Choice(["redis", "memcached"]), help="Only list databases with this protocol")
@click.pass_obj
def list_databases(client, subscription_id, name, protocol):
    filters = []
    if name:
        filters.append(by_name(name))
    if protocol:
        filters.append(by_protocol(protocol))

    databases = filter_databases(client.database.list(subscription_id), filters)

    for database in databases:
        click.echo()
        echo_database(database)

    click.echo()
    echo_key_value("Databases", len(databases))


@cli.command()
@click.option("--subscription-id", required=True, type=int, help="Subscription ID")
@optgroup.group(
    "Identifiers",
    cls=RequiredMutuallyExclusiveOptionGroup,
    help="The manner of identifying the database",
)
@optgroup.option("--id", "database_id", type=int, help="Database ID")
@optgroup.option("--name", help="Database name")
@click.pass_obj
def show_database(client, subscription_id, database_id, name):
    if name:
        matches = filter_databases(client.database.list(subscription_id), [by_name(name)])

        if len(matches) != 1:
            raise click.ClickException(f"expected one database named `{name}`, found {len(matches)}")

        database_id = matches[0].database_id

    click.echo()
    echo_database(client.database.get(subscription_id, database_id))


@cli.command()
@click.option("--subscription-id", required=True, type=int, help="Subscription ID")
@click.option("--id", "database_id", required=True, type=int, help="Database ID")
@click.option("--timeout", default=1800, show_default=True, type=float, help="Seconds to wait at most")
@click.option("--interval", default=10, show_default=True, type=float, help="Seconds between status checks")
@click.pass_obj
def wait_database(client, subscription_id, database_id, timeout, interval):
    try:
        wait_for_database_to_be_active(
            client,
            subscription_id,
            database_id,
            ctx=OperationContext(timeout=timeout),
            timeout=timeout,
            delay=0,
            poll_interval=interval,
        )
    except RedisCloudError as e:
        raise click.ClickException(str(e))

    echo_key_value("Database", f"{database_id} is active")


def run():
    exit(cli())


if __name__ == "__main__":
    run()
