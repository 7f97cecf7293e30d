from enum import Enum


class EnumEnvironment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class EnumLogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class EnumArtifactsBackend(str, Enum):
    FILE = "file"
    GRIDFS = "gridfs"


# Sunday = 0 ... Saturday = 6
DEFAULT_SUGGESTION_DAYS = [1, 2, 3, 4, 5]
DEFAULT_SUGGESTION_HOURS = list(range(6, 23))

TRAINING_LOCK_NAME = "crowdcast:model-training"
