"""
AuthSession - Error Classifier

Associe à chaque type d'action un message d'échec fixe. Le contenu de
l'exception du fournisseur n'est jamais inspecté.
"""

from typing import Dict

from .interfaces import ActionKind, ErrorInfo, IErrorClassifier


FAILURE_MESSAGES: Dict[ActionKind, str] = {
    ActionKind.SIGN_IN: "Failed to login. Please check your credentials",
    ActionKind.REGISTER: "Failed to create account",
    ActionKind.FEDERATED_SIGN_IN: "Failed to sign in with Google",
    ActionKind.RESET_PASSWORD: "Failed to send password reset email",
    ActionKind.SIGN_OUT: "Failed to logout",
}


class ErrorClassifier(IErrorClassifier):
    """Classification des échecs par type d'action, sans effet de bord."""

    def classify(self, action: ActionKind) -> str:
        return FAILURE_MESSAGES[action]

    def to_error_info(self, action: ActionKind, failure: BaseException) -> ErrorInfo:
        return ErrorInfo(action=action, message=self.classify(action))
