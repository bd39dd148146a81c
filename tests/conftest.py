import sys
from pathlib import Path
import pytest

# modules live flat at the project root
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from Listener_Config import Listener_Config, Partition_Config


ENV_KEYS = [
    "connection_string", "publication_name", "slot_name", "write_nulls", "partitions",
    "POSTGRES_HOST", "POSTGRES_PORT", "POSTGRES_USER", "POSTGRES_PASSWORD", "POSTGRES_DB",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """load_dotenv writes straight into os.environ, so register every key with monkeypatch first."""
    for key in ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


@pytest.fixture
def orders_config():
    """Example scenario: the orders listener."""
    return Listener_Config("Host=db;Database=app", "pub_orders", "slot_orders")


@pytest.fixture
def partitioned_config(orders_config):
    orders_config.partitions["orders_2024"] = Partition_Config("customer_id", 4)
    orders_config.partitions["orders_2025"] = Partition_Config("customer_id", 8)
    orders_config.write_nulls = True
    return orders_config
