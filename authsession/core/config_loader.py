"""
AuthSession - Config Loader Implementation
Charge la configuration depuis des fichiers YAML.
"""

from pathlib import Path
from typing import Union

import yaml

from .errors import ConfigError
from .interfaces import AuthSessionConfig, IConfigLoader


class ConfigLoader(IConfigLoader):
    """Chargement des configurations depuis fichiers YAML."""

    def __init__(self, configs_path: Union[str, Path] = "configs"):
        self.configs_path = Path(configs_path)

    async def load(self, name: str) -> AuthSessionConfig:
        """
        Charge `<configs_path>/<name>.yaml`.

        Args:
            name: Nom de la configuration (sans extension)

        Returns:
            Configuration validée

        Raises:
            ConfigError: Si fichier inexistant, YAML invalide ou modèle non respecté
        """
        config_file = self.configs_path / f"{name}.yaml"

        if not config_file.exists():
            raise ConfigError(f"Configuration non trouvée: {name}")

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Erreur de parsing YAML: {e}") from e
        except OSError as e:
            raise ConfigError(f"Erreur de lecture fichier: {e}") from e

        # Un fichier vide donne la configuration par défaut
        if raw is None:
            raw = {}

        if not isinstance(raw, dict):
            raise ConfigError("Configuration doit être un objet YAML")

        return AuthSessionConfig.from_dict(raw)
