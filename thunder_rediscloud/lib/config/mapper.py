import json
from enum import Enum
from typing import Type, Any

from dacite import from_dict, Config
from pulumi import log, runtime

from thunder_rediscloud.lib.base.types import ConfigType

# Pulumi hands numbers around as floats and JSON config may turn numeric strings into ints.
_TYPE_HOOKS = {
    int: lambda v: int(v) if isinstance(v, float) and v.is_integer() else v,
    float: lambda v: float(v) if isinstance(v, int) and not isinstance(v, bool) else v,
    str: lambda v: str(v) if isinstance(v, int) and not isinstance(v, bool) else v,
}


def _parse_args_value(value: Any) -> Any:
    """Parse and return json values if valid json, else return original value

    :param value: A potential json string
    :return: Parsed json object or raw arg
    """
    try:
        return json.loads(value)
    except (json.decoder.JSONDecodeError, TypeError):
        return value


def get_raw_stack_config(stack: str) -> dict:
    """Pull stack config from Pulumi internals, clean it and return in dict form

    This method may break when upgrading the ``pulumi`` python dependency.

    :param stack: Name of the stack
    :return: dict
    """
    stack_prefix = stack + ":"

    config = {
        k.removeprefix(stack_prefix): _parse_args_value(v)
        for k, v in runtime.config.CONFIG.items()
        if k.startswith(stack_prefix)
    }

    # the raw dict may hold secrets, only the keys are logged
    log.debug(f"config keys for stack `{stack}` are {sorted(config)}")

    return config


def map_config(config_cls: Type[ConfigType], data: dict, strict: bool = True) -> ConfigType:
    """Map a plain dict onto a config dataclass

    Uses `dacite <https://github.com/konradhalas/dacite>`_ to map dict to dataclass. Enum fields are cast from their
    values and numbers are coerced to the declared numeric type.

    :param config_cls: The dataclass to build
    :param data: Plain dict, e.g. stack config or dynamic resource properties
    :param strict: Reject keys the dataclass does not declare
    :return: An instance of ``config_cls``
    """
    return from_dict(
        data_class=config_cls,
        data=data,
        config=Config(
            cast=[Enum],
            type_hooks=_TYPE_HOOKS,
            strict=strict,
        ),
    )


def get_stack_config(stack: str, config_cls: Type[ConfigType]) -> ConfigType:
    """Get a stack config in dataclass form

    :param stack: Name of the stack
    :param config_cls: The dataclass for the config
    :return: The stack config expressed in the module's config dataclass
    """
    config = map_config(config_cls, get_raw_stack_config(stack))

    log.debug(f"mapped config for stack `{stack}` onto `{config_cls.__name__}`")

    return config
