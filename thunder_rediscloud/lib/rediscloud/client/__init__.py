from .core import RedisCloudClient, ACCESS_KEY_ENV, SECRET_KEY_ENV, URL_ENV
from .databases import DatabaseService
from .models import (
    CreateDatabase,
    Database,
    DatabaseAlert,
    DatabaseModule,
    RegexRule,
    Task,
    ThroughputMeasurement,
    UpdateDatabase,
)
from .tasks import TaskService
