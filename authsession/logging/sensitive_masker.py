"""
AuthSession - Sensitive Masker

Masquage des secrets et des adresses e-mail avant écriture des logs.
"""

from typing import Any, Dict, List, Optional

from .interfaces import ISensitiveMasker


class SensitiveMasker(ISensitiveMasker):
    """
    Masquage récursif des données sensibles.

    Les clés contenant un pattern secret voient leur valeur remplacée
    par MASK_VALUE. Les clés e-mail gardent le premier caractère et le
    domaine, pour rester exploitables en diagnostic.

    Example:
        masker = SensitiveMasker()
        masker.mask({"password": "pw", "email": "bea@x.com"})
        # {"password": "***MASKED***", "email": "b***@x.com"}
    """

    def __init__(self, additional_patterns: Optional[List[str]] = None) -> None:
        """
        Args:
            additional_patterns: Patterns supplémentaires à masquer
        """
        self._patterns: List[str] = [p.lower() for p in self.SENSITIVE_PATTERNS]
        for pattern in additional_patterns or []:
            self.add_pattern(pattern)

    @property
    def patterns(self) -> List[str]:
        """Patterns sensibles configurés."""
        return list(self._patterns)

    def mask(self, data: Dict[str, Any]) -> Dict[str, Any]:
        if not isinstance(data, dict):
            return data

        result: Dict[str, Any] = {}
        for key, value in data.items():
            if self.is_sensitive_key(key):
                result[key] = self.MASK_VALUE
            elif self._is_email_key(key) and isinstance(value, str):
                result[key] = self.mask_email(value)
            elif isinstance(value, dict):
                result[key] = self.mask(value)
            elif isinstance(value, list):
                result[key] = [self.mask(v) if isinstance(v, dict) else v for v in value]
            else:
                result[key] = value
        return result

    def mask_email(self, value: str) -> str:
        """
        Masque une adresse e-mail.

        Args:
            value: Adresse brute

        Returns:
            Premier caractère + *** + domaine, ou MASK_VALUE si pas d'adresse
        """
        local, sep, domain = (value or "").partition("@")
        if not sep or not local:
            return self.MASK_VALUE
        return f"{local[0]}***@{domain}"

    def is_sensitive_key(self, key: str) -> bool:
        if not key:
            return False
        key_lower = key.lower()
        return any(pattern in key_lower for pattern in self._patterns)

    def _is_email_key(self, key: str) -> bool:
        key_lower = (key or "").lower()
        return any(pattern in key_lower for pattern in self.EMAIL_PATTERNS)

    def add_pattern(self, pattern: str) -> None:
        """
        Ajoute un pattern sensible.

        Raises:
            ValueError: Si pattern vide
        """
        if not pattern or not pattern.strip():
            raise ValueError("Pattern cannot be empty")
        pattern_lower = pattern.lower().strip()
        if pattern_lower not in self._patterns:
            self._patterns.append(pattern_lower)
