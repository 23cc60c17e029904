from pravega_systest.core.config import get_config


def registry_prefix() -> str:
    """Registry prefix for Pravega images, e.g. "docker.io/pravega/" or ""."""
    registry = get_config("dockerImageRegistry", "")
    return f"{registry.rstrip('/')}/" if registry else ""


def image_version() -> str:
    return get_config("imageVersion", "latest")


def pravega_image(image_name_key: str, default_name: str) -> str:
    """Full image reference built from the registry, image name and version settings."""
    name = get_config(image_name_key, default_name)
    return f"{registry_prefix()}{name}:{image_version()}"
