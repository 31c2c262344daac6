# clauses.py
import logging

logger = logging.getLogger(__name__)

WHITESPACE = " \t\n\r"
TERMINATOR = ";"
SEPARATOR = ","
QUOTES = ("'", '"')
NAME_DELIMITERS = WHITESPACE + "()," + TERMINATOR


def _is_word_char(char):
    return char.isalnum() or char == "_"


def _quote_spans(text):
    """Renvoie, pour chaque position, True si elle est à l'intérieur de guillemets."""
    inside = []
    in_single = in_double = False
    for char in text:
        if char == '"' and not in_single:
            in_double = not in_double
            inside.append(True)
        elif char == "'" and not in_double:
            in_single = not in_single
            inside.append(True)
        else:
            inside.append(in_single or in_double)
    return inside


def has_open_quote(text):
    """True si le texte se termine à l'intérieur d'une chaîne entre guillemets."""
    in_single = in_double = False
    for char in text:
        if char == '"' and not in_single:
            in_double = not in_double
        elif char == "'" and not in_double:
            in_single = not in_single
    return in_single or in_double


def find_keyword(text, keyword, whole_word=False):
    """
    Recherche un mot-clé sans tenir compte de la casse.

    Args:
        text (str): Texte dans lequel chercher
        keyword (str): Mot-clé recherché; vide, il correspond à la position 0
        whole_word (bool): Ignore les occurrences collées à un identifiant
            ou situées entre guillemets

    Returns:
        int: Position de la première occurrence, ou -1
    """
    if not keyword:
        return 0

    needle = keyword.upper()
    quoted = _quote_spans(text) if whole_word else None
    for pos in range(len(text) - len(keyword) + 1):
        end = pos + len(keyword)
        if text[pos:end].upper() != needle:
            continue
        if not whole_word:
            return pos
        before_ok = pos == 0 or not _is_word_char(text[pos - 1])
        after_ok = end >= len(text) or not _is_word_char(text[end])
        if before_ok and after_ok and not quoted[pos]:
            return pos
    return -1


def strip_statement_terminator(text):
    """Enlève les espaces et un éventuel ';' final."""
    text = text.strip(WHITESPACE)
    if text.endswith(TERMINATOR):
        text = text[:-1]
    return text.strip(WHITESPACE)


def parse_literal(raw):
    """Nettoie une valeur littérale: une paire de guillemets extérieurs est retirée."""
    text = strip_statement_terminator(raw)
    if len(text) >= 2 and text[0] == text[-1] and text[0] in QUOTES:
        text = text[1:-1]
    return text.strip(WHITESPACE)


def find_unquoted(text, char):
    """Position du premier caractère hors guillemets, ou -1."""
    quoted = _quote_spans(text)
    for i, current in enumerate(text):
        if current == char and not quoted[i]:
            return i
    return -1


def split_quoted(text, separator=SEPARATOR):
    """
    Découpe un texte sur le séparateur, hors des zones entre guillemets.

    Chaque style de guillemet est suivi séparément: un ' dans une chaîne
    entre " ne la termine pas. Un dernier fragment vide est ignoré.
    """
    fragments = []
    token = []
    in_single = in_double = False
    for char in text:
        if char == '"' and not in_single:
            in_double = not in_double
        elif char == "'" and not in_double:
            in_single = not in_single
        elif char == separator and not in_single and not in_double:
            fragments.append("".join(token).strip(WHITESPACE))
            token = []
            continue
        token.append(char)

    if token:
        fragments.append("".join(token).strip(WHITESPACE))
    return fragments


def parse_parenthesized_list(text):
    """
    Extrait les littéraux d'une liste entre parenthèses.

    Une liste vide "()" donne un seul littéral vide.

    Returns:
        list: Valeurs nettoyées par parse_literal
    """
    work = text.strip(WHITESPACE)
    if work.startswith("(") and work.endswith(")"):
        work = work[1:-1]

    fragments = split_quoted(work)
    if not fragments:
        return [""]
    return [parse_literal(fragment) for fragment in fragments]


def extract_where_equality(statement):
    """
    Extrait la condition "colonne = valeur" qui suit WHERE.

    Returns:
        tuple: (colonne, valeur), ou None si WHERE ou le '=' hors guillemets manque
    """
    where_pos = find_keyword(statement, "WHERE", whole_word=True)
    if where_pos == -1:
        return None

    where_part = strip_statement_terminator(statement[where_pos + len("WHERE"):])
    eq = find_unquoted(where_part, "=")
    if eq == -1:
        return None

    column = where_part[:eq].strip(WHITESPACE)
    value = parse_literal(where_part[eq + 1:])
    return column, value


def extract_assignments(set_clause):
    """
    Construit le dictionnaire colonne -> valeur d'une clause SET.

    Les fragments sans '=' hors guillemets sont ignorés (un avertissement est journalisé).
    """
    text = set_clause.strip(WHITESPACE)
    set_pos = find_keyword(text, "SET", whole_word=True)
    if set_pos != -1:
        text = text[set_pos + len("SET"):]
    text = strip_statement_terminator(text)

    assignments = {}
    for fragment in split_quoted(text):
        eq = find_unquoted(fragment, "=")
        if eq == -1:
            logger.warning("Fragment SET ignoré (pas de '='): %r", fragment)
            continue
        column = fragment[:eq].strip(WHITESPACE)
        if column:
            assignments[column] = parse_literal(fragment[eq + 1:])
    return assignments


def extract_name_after_keyword(statement, keyword):
    """
    Lit le nom qui suit immédiatement un mot-clé.

    Le nom s'arrête au premier espace, parenthèse, virgule ou ';'. Avec un mot-clé
    vide, la lecture commence au début du texte.

    Returns:
        str: Le nom, ou "" si le mot-clé est absent
    """
    pos = find_keyword(statement, keyword, whole_word=True)
    if pos == -1:
        return ""

    rest = statement[pos + len(keyword):].strip(WHITESPACE)
    for i, char in enumerate(rest):
        if char in NAME_DELIMITERS:
            rest = rest[:i]
            break
    return strip_statement_terminator(rest)
