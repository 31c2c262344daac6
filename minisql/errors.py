# errors.py


class MiniSQLError(ValueError):
    """Erreur signalée à l'utilisateur; l'instruction n'a aucun effet."""


class StatementSyntaxError(MiniSQLError):
    """Mot-clé, parenthèse ou clause manquant ou mal formé."""


class UnknownColumnError(MiniSQLError):
    pass


class ArityError(MiniSQLError):
    pass


class TableExistsError(MiniSQLError):
    pass


class TableNotFoundError(MiniSQLError):
    pass


class ColumnExistsError(MiniSQLError):
    pass


class InvalidTableNameError(MiniSQLError):
    pass


class StorageError(MiniSQLError):
    """Fichier de table illisible, impossible à écrire ou à supprimer."""
