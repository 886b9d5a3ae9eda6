"""Loading of preshipped translation resources from YAML files.

Builds the static ResourceStore handed to the backend at configuration
time. Files are named ``<namespace>.<language>.yml`` and hold a flat
mapping of translation keys to strings.
"""

from pathlib import Path
from typing import Dict

import yaml

from calinga.i18n.models import ResourceStore, TranslationMap
from calinga.logging import get_module_logger

logger = get_module_logger()


class YAMLResourceLoader:
    """Loader for YAML resource files.

    Attributes:
        resources_dir: Path to directory containing YAML files.
    """

    def __init__(self, resources_dir: Path):
        """Initialize YAML resource loader.

        Args:
            resources_dir: Path to directory with YAML resource files.

        Raises:
            ValueError: If the directory does not exist.
        """
        self.resources_dir = Path(resources_dir)

        if not self.resources_dir.exists():
            raise ValueError(f"Resources directory not found: {self.resources_dir}")

        logger.info("initialized_yaml_loader", resources_dir=str(self.resources_dir))

    def load(self, language: str) -> Dict[str, TranslationMap]:
        """Load all namespaces of a language.

        Args:
            language: Language identifier (e.g., "en").

        Returns:
            Mapping of namespace to TranslationMap.

        Raises:
            FileNotFoundError: If no YAML files exist for the language.
            ValueError: If YAML parsing fails.
        """
        yaml_files = sorted(self.resources_dir.glob(f"*.{language}.yml"))
        if not yaml_files:
            raise FileNotFoundError(
                f"No resource files found for language {language} in {self.resources_dir}"
            )

        namespaces: Dict[str, TranslationMap] = {}
        for yaml_file in yaml_files:
            namespace = yaml_file.name[: -len(f".{language}.yml")]
            try:
                with open(yaml_file, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                logger.error("yaml_parse_error", file=str(yaml_file), error=str(e))
                raise ValueError(f"Failed to parse {yaml_file}: {e}") from e

            if data is None:
                continue
            if not isinstance(data, dict):
                logger.warning(
                    "invalid_yaml_format", file=str(yaml_file), expected="dict"
                )
                continue

            translations = namespaces.setdefault(namespace, {})
            for key, value in data.items():
                if isinstance(value, (dict, list)):
                    logger.warning(
                        "skipped_nested_resource", file=str(yaml_file), key=key
                    )
                    continue
                translations[str(key)] = "" if value is None else str(value)

        logger.info(
            "loaded_resources",
            language=language,
            file_count=len(yaml_files),
            namespace_count=len(namespaces),
        )
        return namespaces

    def load_all(self) -> ResourceStore:
        """Load resources for every language found in the directory.

        Returns:
            ResourceStore mapping language -> namespace -> TranslationMap.
        """
        languages = set()
        for yaml_file in self.resources_dir.glob("*.yml"):
            # "default.en.yml" -> "en"
            parts = yaml_file.name.split(".")
            if len(parts) >= 3:
                languages.add(parts[-2])

        store: ResourceStore = {}
        for language in sorted(languages):
            store[language] = self.load(language)
        return store
