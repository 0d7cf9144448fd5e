"""Built-in default configuration for skill catalog builds."""

# Default configuration that serves as the base for all other configs
DEFAULT_CONFIG = {
    "version": "1.0",
    "paths": {
        "manifest": "catalog/skills.manifest.json",
        "output": "dist",
        "catalog_dir": "catalog",
        "skills_dir": "skills",
    },
    "catalog": {
        "descriptor_file": "SKILL.md",
        "default_icon": "🧠",
        "experimental_dir": ".experimental",
        "package_host": "github.com",
    },
}

CONFIG_FILENAME = "skill-catalog.yaml"
