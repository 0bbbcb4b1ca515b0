from .outputs_from_exports import outputs_from_exports, plain_from_dataclass
from .run_once import run_once
