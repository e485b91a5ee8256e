"""A small rule-based assistant that answers questions about partners."""

from __future__ import annotations

import sqlite3

GREETING = "Bonjour ! Comment puis-je vous aider ?"
DABCHY_QUESTION = "donner moi des informations sur l entreprise dabchy"
DABCHY_ANSWER = (
    "Dabchy est une entreprise tunisienne fondée en 2015. Elle opère dans le domaine "
    "de la vente en ligne, offrant une plateforme pour acheter et vendre des produits "
    "neufs et d'occasion. La plateforme couvre diverses catégories telles que la mode, "
    "l'électronique, les accessoires et bien plus encore. "
)
MATRICULE_KEYWORD = "matricule"
MISSING_MATRICULE = "Veuillez spécifier une matricule fiscale après le mot 'matricule'."
NOT_FOUND = "Aucune entreprise trouvée pour la matricule fiscale fournie."
FALLBACK = "Je suis désolé, je ne comprends pas. Pourriez-vous reformuler ?"


class ChatBot:
    """Answers messages and remembers the questions it was asked."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection
        self._questions: list[str] = []

    @property
    def history(self) -> list[str]:
        """The questions asked so far, oldest first."""
        return list(self._questions)

    def _company_name(self, matricule: str) -> str | None:
        try:
            row = self._connection.execute(
                "SELECT NOM_ENTREPRISE FROM FOOL WHERE MATRICULE_FISCALE = :matricule",
                {"matricule": matricule},
            ).fetchone()
        except sqlite3.Error:
            return None
        if row is None:
            return None
        return "" if row[0] is None else str(row[0])

    def generate_response(self, user_input: str) -> str:
        """Return the answer to one message."""
        text = user_input.lower()
        if "bonjour" in text or "salut" in text:
            return GREETING
        if DABCHY_QUESTION in text:
            return DABCHY_ANSWER
        if MATRICULE_KEYWORD in text:
            if text.strip() == MATRICULE_KEYWORD:
                return MISSING_MATRICULE
            matricule = text.split(MATRICULE_KEYWORD)[-1].strip()
            company = self._company_name(matricule)
            if company is None:
                return NOT_FOUND
            return (
                "Le nom de l'entreprise associée à la matricule fiscale "
                f"{matricule} est : {company}"
            )
        return FALLBACK

    def ask(self, message: str) -> str:
        """Record ``message`` in the history and return the answer to it."""
        self._questions.append(message)
        return self.generate_response(message)

    def history_text(self) -> str:
        """Every question asked so far, each followed by a newline."""
        return "".join(f"{question}\n" for question in self._questions)