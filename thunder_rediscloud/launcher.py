import logging
import os

from pulumi import get_stack, log, export

from thunder_rediscloud.lib.utils import plain_from_dataclass
from thunder_rediscloud.module_manager import module_manager


def run_stack(provider: str, stack_name: str) -> None:
    """Invoke a module with its stack configuration

    :param provider: A provider
    :param stack_name: The stack name
    :return: None
    """
    module = module_manager.get_module(provider, stack_name)

    log.debug(f"running module `{stack_name}`")

    exports = module.run(stack_name)

    export(stack_name, plain_from_dataclass(exports))


def run_active_stack(provider: str = "rediscloud") -> None:
    """Invoke the active module with its configuration

    :param provider: A provider
    :return: None
    """
    stack = get_stack()

    log.debug(f"active stack is `{stack}`")

    run_stack(provider, stack)


# Thunder's log level has to be set before the config and client modules log anything at import time.
if os.getenv("THUNDER_DEBUG"):
    logging.basicConfig(level=logging.DEBUG)
    msg = "thunder logging enabled"
    log.debug(msg)
    logging.debug(msg)
