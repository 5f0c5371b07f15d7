import yaml
from pathlib import Path

def load_config(config_path="config.yaml"):
    """
    Loads disk configuration from a YAML file.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file {config_path} not found.")

    with open(path, "r") as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config.get("disks", {}), dict):
        raise ValueError(f"'disks' in {config_path} must be a mapping of disk names.")

    return config
