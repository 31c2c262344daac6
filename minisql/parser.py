# parser.py
import re

from .clauses import (
    extract_assignments,
    extract_name_after_keyword,
    extract_where_equality,
    find_keyword,
    parse_literal,
    parse_parenthesized_list,
    strip_statement_terminator,
)
from .errors import StatementSyntaxError
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
    WhereClause,
)

# Préfixe de commande -> fonction d'analyse; l'ordre compte (SHOW TABLES avant SHOW TABLE)
_COMMANDS = []


def _command(pattern):
    def register(func):
        _COMMANDS.append((re.compile(pattern, re.IGNORECASE), func))
        return func
    return register


def parse_statement(query_string):
    """
    Analyse une instruction complète et renvoie le nœud correspondant.

    Args:
        query_string (str): Instruction, avec ou sans ';' final

    Returns:
        Un des nœuds de minisql.statements

    Raises:
        StatementSyntaxError: Commande inconnue ou clause mal formée
    """
    cmd = strip_statement_terminator(query_string)
    if not cmd:
        raise StatementSyntaxError("Instruction vide")

    for pattern, func in _COMMANDS:
        if pattern.match(cmd):
            return func(cmd)
    raise StatementSyntaxError(f"Commande inconnue: {cmd.split()[0]}")


def _where(cmd):
    """Clause WHERE facultative; présente mais sans '=' hors guillemets, c'est une erreur."""
    if find_keyword(cmd, "WHERE", whole_word=True) == -1:
        return None
    pair = extract_where_equality(cmd)
    if pair is None or not pair[0]:
        raise StatementSyntaxError("Clause WHERE invalide: 'colonne = valeur' attendu")
    return WhereClause(column=pair[0], value=pair[1])


def _require_name(name, command):
    if not name:
        raise StatementSyntaxError(f"Nom de table manquant dans {command}")
    return name


@_command(r"EXIT\b")
def _parse_exit(cmd):
    return Exit()


@_command(r"CREATE\s+TABLE\b")
def _parse_create_table(cmd):
    table_kw = find_keyword(cmd, "TABLE", whole_word=True)
    open_pos = cmd.find("(", table_kw)
    if open_pos == -1:
        raise StatementSyntaxError("Liste de colonnes entre parenthèses requise")
    close_pos = cmd.find(")", open_pos + 1)
    if close_pos == -1:
        raise StatementSyntaxError("Parenthèse fermante ')' manquante")

    between = cmd[table_kw + len("TABLE"):open_pos].strip()
    table_name = _require_name(extract_name_after_keyword(between, ""), "CREATE TABLE")

    columns = parse_parenthesized_list(cmd[open_pos:close_pos + 1])
    if columns == [""]:
        raise StatementSyntaxError("Aucune colonne spécifiée")
    if any(not column for column in columns):
        raise StatementSyntaxError("Nom de colonne vide dans la liste")
    return CreateTable(table_name=table_name, columns=tuple(columns))


@_command(r"INSERT\s+INTO\b")
def _parse_insert(cmd):
    table_name = _require_name(extract_name_after_keyword(cmd, "INTO"), "INSERT")
    values_pos = find_keyword(cmd, "VALUES", whole_word=True)
    if values_pos == -1:
        raise StatementSyntaxError("VALUES manquant dans INSERT")

    values_part = cmd[values_pos + len("VALUES"):].strip()
    if not (values_part.startswith("(") and values_part.endswith(")")):
        raise StatementSyntaxError("Liste de valeurs entre parenthèses requise après VALUES")
    return Insert(table_name=table_name, values=tuple(parse_parenthesized_list(values_part)))


@_command(r"UPDATE\b")
def _parse_update(cmd):
    table_name = _require_name(extract_name_after_keyword(cmd, "UPDATE"), "UPDATE")
    set_pos = find_keyword(cmd, "SET", whole_word=True)
    if set_pos == -1:
        raise StatementSyntaxError("SET manquant dans UPDATE")

    set_and_rest = cmd[set_pos:]
    where_pos = find_keyword(set_and_rest, "WHERE", whole_word=True)
    set_part = set_and_rest if where_pos == -1 else set_and_rest[:where_pos]

    assignments = extract_assignments(set_part)
    if not assignments:
        raise StatementSyntaxError("Aucune affectation 'colonne = valeur' après SET")
    return Update(
        table_name=table_name,
        assignments=tuple(assignments.items()),
        where=_where(cmd),
    )


@_command(r"DELETE\s+FROM\b")
def _parse_delete(cmd):
    table_name = _require_name(extract_name_after_keyword(cmd, "FROM"), "DELETE")
    return Delete(table_name=table_name, where=_where(cmd))


@_command(r"ALTER\s+TABLE\b")
def _parse_alter(cmd):
    table_name = _require_name(extract_name_after_keyword(cmd, "TABLE"), "ALTER")
    # Les mots-clés sont cherchés après le nom de la table
    after_kw = cmd[find_keyword(cmd, "TABLE", whole_word=True) + len("TABLE"):].lstrip()
    rest = after_kw[len(table_name):]

    add_pos = find_keyword(rest, "ADD", whole_word=True)
    drop_pos = find_keyword(rest, "DROP", whole_word=True)
    if add_pos != -1 and drop_pos != -1:
        raise StatementSyntaxError("ADD et DROP ne peuvent pas être utilisés ensemble")
    if add_pos == -1 and drop_pos == -1:
        raise StatementSyntaxError("ADD ou DROP attendu après le nom de la table")

    if add_pos != -1:
        column = parse_literal(rest[add_pos + len("ADD"):])
        if not column:
            raise StatementSyntaxError("Nom de colonne manquant après ADD")
        return AlterAddColumn(table_name=table_name, column=column)

    column = parse_literal(rest[drop_pos + len("DROP"):])
    if not column:
        raise StatementSyntaxError("Nom de colonne manquant après DROP")
    return AlterDropColumn(table_name=table_name, column=column)


@_command(r"DROP\s+TABLE\b")
def _parse_drop_table(cmd):
    table_name = _require_name(extract_name_after_keyword(cmd, "TABLE"), "DROP")
    return DropTable(table_name=table_name)


@_command(r"SELECT\b")
def _parse_select(cmd):
    select_pos = find_keyword(cmd, "SELECT", whole_word=True)
    from_pos = find_keyword(cmd, "FROM", whole_word=True)
    if from_pos == -1:
        raise StatementSyntaxError("SELECT mal formé: FROM manquant")

    select_part = cmd[select_pos + len("SELECT"):from_pos].strip()
    after_from = cmd[from_pos + len("FROM"):].strip()
    table_name = _require_name(extract_name_after_keyword(after_from, ""), "SELECT")

    if select_part == "*":
        columns = None
    else:
        columns = parse_parenthesized_list(f"({select_part})")
        if any(not column for column in columns):
            raise StatementSyntaxError("Liste de colonnes invalide dans SELECT")
        columns = tuple(columns)
    return Select(table_name=table_name, columns=columns, where=_where(after_from))


@_command(r"SHOW\s+TABLES\s*$")
def _parse_show_tables(cmd):
    return ShowTables()


@_command(r"SHOW\s+PATH\s*$")
def _parse_show_path(cmd):
    return ShowPath()


@_command(r"SHOW\s+TABLE\b")
def _parse_show_table(cmd):
    table_name = _require_name(extract_name_after_keyword(cmd, "TABLE"), "SHOW TABLE")
    return ShowTable(table_name=table_name)
