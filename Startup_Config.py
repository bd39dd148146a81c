import json
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from dotenv import load_dotenv
from psycopg.conninfo import make_conninfo
from Listener_Config import Listener_Config, Partition_Config, Parse_Bool

'''
loads the listener settings from .env files at startup

- Docker_Connections/<server>.env holds the pg connection parts
- app.env holds the publication, slot, write_nulls and partitions
- a missing setting prints an error and closes the program
'''


# holds a pg connection parameters
@dataclass
class Pg_Conn_Info:
    host: str
    port: int
    user: str
    password: str
    dbname: str


# returns the stripped env variable or None if it's not set
def Get_Env(name):
    value = os.getenv(name)
    if value is None:
        return None

    return value.strip()


def Make_Dsn(pg: Pg_Conn_Info):
    return make_conninfo(
        host=pg.host,
        port=pg.port,
        user=pg.user,
        password=pg.password,
        dbname=pg.dbname
    )


# load database connection info from the .env files
def Load_Docker_Env_Config(env_file):
    env_path = Path(env_file)
    load_dotenv(env_path, override=True) # must use override, each server's file uses the same keys

    port = Get_Env("POSTGRES_PORT")
    try:
        port = int(port) if port else None
    except ValueError:
        print(f"Error: POSTGRES_PORT is not a number in file: {env_file}")
        sys.exit(1)

    conn_info = Pg_Conn_Info(
        host=Get_Env("POSTGRES_HOST") or "localhost",   # localhost is for when connecting from host machine
        port=port,
        user=Get_Env("POSTGRES_USER"),
        password=Get_Env("POSTGRES_PASSWORD"),
        dbname=Get_Env("POSTGRES_DB")
    )

    if any(value is None for value in vars(conn_info).values()):
        print(f"Error: missing environment variables in file: {env_file}")
        sys.exit(1)
    else:
        return conn_info


'''
partitions setting is a json object of table -> partition settings
    partitions={"orders": {"column_name": "customer_id", "partition_count": 4}}

return: Dict[str, Partition_Config]
raises ValueError if it isn't a json object of objects, a partition has no column_name,
or partition_count isn't a whole number '''
def Parse_Partitions(raw):
    if not raw:
        return {}

    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("partitions must be a json object")

    partitions = {}
    for name, part in data.items():
        if not isinstance(part, dict):
            raise ValueError(f"partition '{name}' must be a json object")
        if not part.get("column_name"):
            raise ValueError(f"partition '{name}' has no column_name")

        try:
            partition_count = int(part.get("partition_count", 1))
        except (TypeError, ValueError):
            raise ValueError(f"partition '{name}' partition_count must be a whole number")

        partitions[name] = Partition_Config(column_name=part["column_name"], partition_count=partition_count)

    return partitions


# load app settings .env file
# conn_info is only used when app.env has no connection_string
def Load_Listener_Env_Config(env_file, conn_info=None):
    load_dotenv(env_file, override=True)

    connection_string = Get_Env("connection_string")
    if not connection_string and conn_info is not None:
        connection_string = Make_Dsn(conn_info)

    publication_name = Get_Env("publication_name")
    slot_name = Get_Env("slot_name")

    if connection_string is None or publication_name is None or slot_name is None:
        print(f"Error: missing environment variables in file: {env_file}")
        sys.exit(1)

    try:
        partitions = Parse_Partitions(Get_Env("partitions"))
    except ValueError as e:  # json.JSONDecodeError is a ValueError
        print(f"Error: invalid partitions setting in file: {env_file}: {e}")
        sys.exit(1)

    config = Listener_Config(connection_string, publication_name, slot_name)
    config.write_nulls = Parse_Bool(Get_Env("write_nulls") or "false")
    config.partitions.update(partitions)

    return config
