# engine.py
import logging
import os

import pandas as pd

from .errors import ArityError, MiniSQLError, StorageError, TableExistsError, TableNotFoundError
from .parser import parse_statement
from .statements import (
    AlterAddColumn,
    AlterDropColumn,
    CreateTable,
    Delete,
    DropTable,
    Exit,
    Insert,
    Select,
    ShowPath,
    ShowTable,
    ShowTables,
    Update,
)
from .table import TableImage

logger = logging.getLogger(__name__)


class CommandEngine:
    def __init__(self, store):
        """
        Exécute les instructions sur les tables du stockage.

        Chaque instruction charge l'image complète de la table, la valide,
        la modifie en mémoire puis l'enregistre une seule fois.

        Args:
            store (TableStore): Stockage des fichiers de table
        """
        self.store = store

    def parse_and_execute(self, query_string, confirmed=False):
        """
        Analyse et exécute une instruction.

        Args:
            query_string (str): Instruction complète
            confirmed (bool): Confirmation déjà donnée pour un DELETE sans WHERE

        Returns:
            dict: "success", "data", "confirm", "exit" ou "error"
        """
        try:
            statement = parse_statement(query_string)
            return self.execute(statement, confirmed=confirmed)
        except MiniSQLError as e:
            logger.debug("Instruction refusée: %s", e)
            return {"error": str(e)}

    def execute(self, statement, confirmed=False):
        logger.debug("Exécution de %s", type(statement).__name__)
        if isinstance(statement, CreateTable):
            return self._execute_create_table(statement)
        if isinstance(statement, Insert):
            return self._execute_insert(statement)
        if isinstance(statement, Update):
            return self._execute_update(statement)
        if isinstance(statement, Delete):
            return self._execute_delete(statement, confirmed)
        if isinstance(statement, (AlterAddColumn, AlterDropColumn)):
            return self._execute_alter(statement)
        if isinstance(statement, DropTable):
            return self._execute_drop_table(statement)
        if isinstance(statement, Select):
            return self._execute_select(statement)
        if isinstance(statement, ShowTable):
            return self._execute_show_table(statement)
        if isinstance(statement, ShowTables):
            return self._execute_show_tables()
        if isinstance(statement, ShowPath):
            return self._execute_show_path()
        if isinstance(statement, Exit):
            return {"exit": True}
        raise MiniSQLError(f"Instruction non prise en charge: {type(statement).__name__}")

    def _load(self, table_name):
        return TableImage.from_rows(table_name, self.store.load(table_name))

    def _execute_create_table(self, stmt):
        """Exécute une commande CREATE TABLE."""
        if self.store.exists(stmt.table_name):
            raise TableExistsError(f"La table '{stmt.table_name}' existe déjà")

        self.store.store(stmt.table_name, [list(stmt.columns)])
        return {"success": f"Table '{stmt.table_name}' créée avec {len(stmt.columns)} colonne(s)"}

    def _execute_insert(self, stmt):
        """Exécute une commande INSERT INTO."""
        table = self._load(stmt.table_name)
        if len(stmt.values) != table.width:
            raise ArityError(
                f"Nombre de valeurs incorrect: {table.width} attendue(s), {len(stmt.values)} reçue(s)"
            )

        table.append(stmt.values)
        self.store.store(table.name, table.rows())
        return {"success": f"1 enregistrement inséré dans '{table.name}'", "count": 1}

    def _where_index(self, table, where):
        if where is None:
            return None, None
        return table.column_index(where.column, "WHERE"), where.value

    def _execute_update(self, stmt):
        """Exécute une commande UPDATE."""
        table = self._load(stmt.table_name)
        assignments = [
            (table.column_index(column, "SET"), value) for column, value in stmt.assignments
        ]
        where_index, value = self._where_index(table, stmt.where)

        updated = table.update(assignments, where_index, value)
        self.store.store(table.name, table.rows())
        return {"success": f"{updated} enregistrement(s) mis à jour dans '{table.name}'", "count": updated}

    def _execute_delete(self, stmt, confirmed=False):
        """Exécute une commande DELETE FROM; sans WHERE, une confirmation est exigée."""
        table = self._load(stmt.table_name)

        if stmt.where is None:
            if not confirmed:
                return {
                    "confirm": f"ATTENTION: tous les enregistrements de la table '{table.name}' seront supprimés!",
                    "statement": stmt,
                }
            deleted = table.truncate()
            self.store.store(table.name, table.rows())
            return {"success": f"Tous les enregistrements de '{table.name}' supprimés", "count": deleted}

        where_index, value = self._where_index(table, stmt.where)
        deleted = table.delete(where_index, value)
        self.store.store(table.name, table.rows())
        return {"success": f"{deleted} enregistrement(s) supprimé(s) de '{table.name}'", "count": deleted}

    def _execute_alter(self, stmt):
        """Exécute une commande ALTER TABLE ... ADD / DROP."""
        table = self._load(stmt.table_name)
        if isinstance(stmt, AlterAddColumn):
            table.add_column(stmt.column)
            message = f"Colonne '{stmt.column}' ajoutée à la table '{table.name}'"
        else:
            table.drop_column(stmt.column)
            message = f"Colonne '{stmt.column}' supprimée de la table '{table.name}'"

        self.store.store(table.name, table.rows())
        return {"success": message}

    def _execute_drop_table(self, stmt):
        """Exécute une commande DROP TABLE."""
        if not self.store.exists(stmt.table_name):
            raise TableNotFoundError(f"La table '{stmt.table_name}' n'existe pas")
        path = self.store.drop(stmt.table_name)
        return {"success": f"Table '{stmt.table_name}' supprimée ({path})"}

    def _execute_select(self, stmt):
        """Exécute une commande SELECT; le stockage n'est pas modifié."""
        table = self._load(stmt.table_name)
        if stmt.columns is not None:
            for column in stmt.columns:
                table.column_index(column, "SELECT")
        where_index, value = self._where_index(table, stmt.where)
        return {"data": table.to_frame(stmt.columns, where_index, value)}

    def _execute_show_table(self, stmt):
        """Exécute une commande SHOW TABLE."""
        table = self._load(stmt.table_name)
        return {"data": table.to_frame()}

    def _execute_show_tables(self):
        return {"data": pd.DataFrame({"table": self.store.list_tables()}, dtype=object)}

    def _execute_show_path(self):
        try:
            cwd = os.getcwd()
        except OSError as e:
            raise StorageError(f"Répertoire courant introuvable: {e}") from e
        return {
            "success": f"Répertoire courant:     {cwd}\nRépertoire de données:  {self.store.root_dir}"
        }
