# codec.py
# Format texte des tables: une ligne par rangée, champs séparés par des virgules.

SEPARATOR = ","
QUOTE = '"'
LINE_BREAK = "\n"


def _decode_line(line):
    """Découpe une ligne en champs."""
    fields = []
    i = 0
    while i < len(line):
        if line[i] == QUOTE:
            # Champ entre guillemets: "" vaut un guillemet littéral
            acc = []
            i += 1
            while i < len(line):
                if line[i] == QUOTE:
                    if i + 1 < len(line) and line[i + 1] == QUOTE:
                        acc.append(QUOTE)
                        i += 2
                    else:
                        i += 1
                        break
                else:
                    acc.append(line[i])
                    i += 1
            fields.append("".join(acc))
            if i < len(line) and line[i] == SEPARATOR:
                i += 1
        else:
            j = line.find(SEPARATOR, i)
            if j == -1:
                j = len(line)
            fields.append(line[i:j].strip())
            i = j + 1 if j < len(line) else j

    if not line or line.endswith(SEPARATOR):
        fields.append("")
    return fields


def decode(text):
    """
    Décode le contenu d'un fichier de table.

    Args:
        text (str): Contenu brut

    Returns:
        list: Liste de rangées, chaque rangée étant une liste de chaînes
    """
    lines = text.split(LINE_BREAK)
    if lines and lines[-1] == "":
        lines.pop()
    return [_decode_line(line) for line in lines]


def encode_field(cell):
    # Les champs non quotés sont rognés à la lecture
    if SEPARATOR in cell or QUOTE in cell or cell != cell.strip():
        return QUOTE + cell.replace(QUOTE, QUOTE * 2) + QUOTE
    return cell


def encode(rows):
    """Encode les rangées; chaque ligne se termine par un saut de ligne."""
    return "".join(
        SEPARATOR.join(encode_field(cell) for cell in row) + LINE_BREAK
        for row in rows
    )
