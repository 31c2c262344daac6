# table.py
import logging

import pandas as pd

from .errors import ColumnExistsError, TableNotFoundError, UnknownColumnError

logger = logging.getLogger(__name__)


class TableImage:
    def __init__(self, name, header, data=None):
        """
        Image en mémoire d'une table: l'en-tête puis les rangées de données.

        Les colonnes sont adressées par position; un nom n'est résolu en
        index qu'une fois par instruction.

        Args:
            name (str): Nom de la table
            header (list): Noms des colonnes
            data (list): Rangées de données (listes de chaînes)
        """
        self.name = name
        self.header = list(header)
        self.data = [list(row) for row in (data or [])]

    @classmethod
    def from_rows(cls, name, rows):
        """Construit l'image à partir des rangées chargées (rangée 0 = en-tête)."""
        if not rows:
            raise TableNotFoundError(f"La table '{name}' n'existe pas ou est vide")
        return cls(name, rows[0], rows[1:])

    def rows(self):
        return [list(self.header)] + [list(row) for row in self.data]

    @property
    def width(self):
        return len(self.header)

    def column_index(self, column, clause):
        """
        Résout un nom de colonne en index (première occurrence dans l'en-tête).

        Raises:
            UnknownColumnError: La colonne n'existe pas
        """
        indexes = {}
        for i, name in enumerate(self.header):
            indexes.setdefault(name, i)
        if column not in indexes:
            raise UnknownColumnError(f"Colonne inconnue dans {clause}: {column}")
        return indexes[column]

    def is_well_formed(self, row):
        return len(row) == self.width

    def matches(self, row, where_index, value):
        """Vrai si la rangée satisfait la condition (toujours vrai sans WHERE)."""
        if where_index is None:
            return True
        return self.is_well_formed(row) and row[where_index] == value

    def append(self, values):
        self.data.append(list(values))

    def update(self, assignments, where_index=None, value=None):
        """
        Applique des affectations positionnelles.

        Args:
            assignments (list): Paires (index, valeur)

        Returns:
            int: Nombre de rangées modifiées
        """
        updated = 0
        for row in self.data:
            if not self.is_well_formed(row) or not self.matches(row, where_index, value):
                continue
            for index, new_value in assignments:
                row[index] = new_value
            updated += 1
        return updated

    def delete(self, where_index, value):
        """Retire les rangées qui correspondent; renvoie le nombre supprimé."""
        kept = [row for row in self.data if not self.matches(row, where_index, value)]
        deleted = len(self.data) - len(kept)
        self.data = kept
        return deleted

    def truncate(self):
        count = len(self.data)
        self.data = []
        return count

    def add_column(self, column):
        if column in self.header:
            raise ColumnExistsError(f"La colonne '{column}' existe déjà")
        self.header.append(column)
        for row in self.data:
            row.append("")

    def drop_column(self, column):
        index = self.column_index(column, "ALTER TABLE DROP")
        del self.header[index]
        for row in self.data:
            if index < len(row):
                del row[index]

    def to_frame(self, columns=None, where_index=None, value=None):
        """
        Construit un DataFrame projeté et filtré pour l'affichage.

        Les rangées dont la largeur diffère de l'en-tête sont ignorées.

        Args:
            columns (list): Noms des colonnes projetées, None pour toutes
            where_index (int): Index de la colonne filtrée, ou None
            value (str): Valeur recherchée

        Returns:
            pandas.DataFrame: Cellules texte, colonnes nommées comme la projection
        """
        rows = [row for row in self.data if self.is_well_formed(row)]
        skipped = len(self.data) - len(rows)
        if skipped:
            logger.warning("Table '%s': %d rangée(s) mal formée(s) ignorée(s)", self.name, skipped)

        # Colonnes positionnelles: les noms dupliqués ne gênent pas le filtrage
        df = pd.DataFrame(rows, columns=range(self.width), dtype=object)
        if where_index is not None:
            df = df[df[where_index] == value]

        if columns is None:
            names = list(self.header)
            indexes = list(range(self.width))
        else:
            names = list(columns)
            indexes = [self.column_index(column, "SELECT") for column in columns]

        df = df[indexes]
        df.columns = names
        return df.reset_index(drop=True)
