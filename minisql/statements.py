# statements.py
# Arbre des instructions analysées; reconstruit pour chaque instruction.
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple


@dataclass(frozen=True)
class WhereClause:
    column: str
    value: str


@dataclass(frozen=True)
class CreateTable:
    table_name: str
    columns: Sequence[str]


@dataclass(frozen=True)
class Insert:
    table_name: str
    values: Sequence[str]


@dataclass(frozen=True)
class Update:
    table_name: str
    # Paires (colonne, valeur) dans l'ordre de la clause SET
    assignments: Sequence[Tuple[str, str]]
    where: Optional[WhereClause] = None


@dataclass(frozen=True)
class Delete:
    table_name: str
    where: Optional[WhereClause] = None


@dataclass(frozen=True)
class AlterAddColumn:
    table_name: str
    column: str


@dataclass(frozen=True)
class AlterDropColumn:
    table_name: str
    column: str


@dataclass(frozen=True)
class DropTable:
    table_name: str


@dataclass(frozen=True)
class Select:
    table_name: str
    # None pour SELECT *
    columns: Optional[Sequence[str]]
    where: Optional[WhereClause] = None


@dataclass(frozen=True)
class ShowTable:
    table_name: str


@dataclass(frozen=True)
class ShowTables:
    pass


@dataclass(frozen=True)
class ShowPath:
    pass


@dataclass(frozen=True)
class Exit:
    pass
