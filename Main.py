import sys
from pathlib import Path
from Listener_Config import Listener_Config, Partition_Config, Mask_Dsn
from Startup_Config import Load_Docker_Env_Config, Load_Listener_Env_Config


# check app.env exists next to Main.py. Docker_Connections is optional, app.env can
# hold the whole connection_string instead
def Check_Env_Files(base_dir):
    app_env_path = Path(base_dir) / "app.env"
    if not app_env_path.exists():
        print(f"Error: app.env is missing from {base_dir}")
        sys.exit(1)


# readable summary of the listener settings. the password is masked
def Describe_Listener_Config(config: Listener_Config):
    lines = [
        f"data source:       {Mask_Dsn(config.data_source_address)}",
        f"publication:       {config.publication_name}",
        f"replication slot:  {config.replication_slot_name}",
        f"write nulls:       {config.write_nulls}",
    ]

    if not config.partitions:
        lines.append("partitions:        none")
    else:
        lines.append(f"partitions:        {len(config.partitions)}")
        for name in sorted(config.partitions):
            part = config.partitions[name]
            if isinstance(part, Partition_Config):
                lines.append(f"  {name}: column={part.column_name} count={part.partition_count}")
            else:
                lines.append(f"  {name}: {part!r}")

    return "\n".join(lines)


def Main(base_dir=None):
    base_dir = Path(base_dir) if base_dir else Path(__file__).parent

    # these close the program if they fail
    Check_Env_Files(base_dir)

    primary_config = None
    primary_env = base_dir / "Docker_Connections" / "Primary.env"
    if primary_env.exists():
        primary_config = Load_Docker_Env_Config(primary_env)

    listener_config = Load_Listener_Env_Config(base_dir / "app.env", primary_config)

    print("Listener configuration loaded:")
    print(Describe_Listener_Config(listener_config))

    return listener_config


if __name__ == "__main__":
    Main()
