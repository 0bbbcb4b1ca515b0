# This file is boilerplate. Copy it to any new projects you create.
# It calls the launcher that ships with `thunder_rediscloud`, which picks the module to run from the stack name,
# so a stack named `databases` runs `thunder_rediscloud/modules/rediscloud/databases`.
#
# Redis Cloud credentials are read from `REDISCLOUD_ACCESS_KEY` and `REDISCLOUD_SECRET_KEY`.
from thunder_rediscloud.launcher import run_active_stack

run_active_stack("rediscloud")
