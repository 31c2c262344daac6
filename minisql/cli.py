# cli.py
import cmd
import logging

from tabulate import tabulate

from .clauses import TERMINATOR, find_unquoted, has_open_quote

logger = logging.getLogger(__name__)

CONFIRM_ANSWERS = ("O", "Y")


def format_frame(df):
    """Met en forme un résultat sous forme de tableau encadré suivi du nombre de rangées."""
    table = tabulate(df, headers="keys", tablefmt="psql", showindex=False, disable_numparse=True)
    return f"{table}\n{len(df)} enregistrement(s) trouvé(s)"


class MiniSQLShell(cmd.Cmd):
    intro = "Bienvenue dans MiniSQL. Les instructions se terminent par ';'. Tapez help ou ? pour l'aide."
    prompt = "sql> "
    continuation_prompt = "  -> "

    def __init__(self, engine, stdin=None, stdout=None):
        super().__init__(stdin=stdin, stdout=stdout)
        if stdin is not None:
            self.use_rawinput = False
        self.engine = engine
        self.buffer = ""

    def onecmd(self, line):
        # Une instruction en cours de saisie absorbe toutes les lignes suivantes
        if self.buffer:
            return self.default(line)
        return super().onecmd(line)

    def default(self, line):
        """Accumule les lignes et exécute chaque instruction terminée par ';'."""
        self.buffer += line + "\n"
        while True:
            end = find_unquoted(self.buffer, TERMINATOR)
            if end == -1:
                break
            statement = self.buffer[:end + 1].strip()
            self.buffer = self.buffer[end + 1:]
            if statement != TERMINATOR and self.run_statement(statement):
                self.buffer = ""
                return True

        if has_open_quote(self.buffer):
            # Une valeur ne peut pas contenir de saut de ligne
            pending = self.buffer.strip()
            logger.warning("Instruction abandonnée, guillemet non fermé: %r", pending)
            self._print(f"Erreur: Guillemet non fermé dans l'instruction: {pending}")
            self.buffer = ""
        if not self.buffer.strip():
            self.buffer = ""
        self.prompt = self.continuation_prompt if self.buffer else MiniSQLShell.prompt
        return False

    def run_statement(self, statement):
        """
        Exécute une instruction complète et affiche le résultat.

        Returns:
            bool: True si la boucle doit s'arrêter
        """
        try:
            result = self.engine.parse_and_execute(statement)
            if "confirm" in result:
                if not self._confirm(result["confirm"]):
                    self._print("Opération annulée")
                    return False
                result = self.engine.parse_and_execute(statement, confirmed=True)
            return self._print_result(result)
        except Exception as e:
            logger.exception("Erreur inattendue pendant l'exécution de %r", statement)
            self._print(f"Erreur: {str(e)}")
            return False

    def execute_text(self, text):
        """Exécute un texte contenant une ou plusieurs instructions (option --exec ou --file)."""
        for line in text.splitlines():
            if self.onecmd(line):
                return True
        if self.buffer.strip():
            # Dernière instruction sans ';'
            return self.default(TERMINATOR)
        return False

    def _print(self, message):
        print(message, file=self.stdout)

    def _print_result(self, result):
        if "error" in result:
            self._print(f"Erreur: {result['error']}")
        elif "exit" in result:
            return self.do_exit("")
        elif "success" in result:
            self._print(result["success"])
        elif "data" in result:
            self._print(format_frame(result["data"]))
        return False

    def _confirm(self, message):
        self._print(message)
        question = "Voulez-vous continuer? (O/N): "
        try:
            if self.use_rawinput:
                answer = input(question)
            else:
                self.stdout.write(question)
                self.stdout.flush()
                answer = self.stdin.readline()
        except EOFError:
            return False
        return answer.strip()[:1].upper() in CONFIRM_ANSWERS

    def help_sql(self):
        self._print("Instructions reconnues (terminées par ';'):")
        self._print("  CREATE TABLE t (col1, col2, ...)")
        self._print("  INSERT INTO t VALUES (v1, v2, ...)")
        self._print("  UPDATE t SET col = v [, ...] [WHERE col = v]")
        self._print("  DELETE FROM t [WHERE col = v]")
        self._print("  ALTER TABLE t ADD col | ALTER TABLE t DROP col")
        self._print("  DROP TABLE t")
        self._print("  SELECT * | col1, col2 FROM t [WHERE col = v]")
        self._print("  SHOW TABLE t | SHOW TABLES | SHOW PATH | EXIT")

    def do_exit(self, arg):
        """Quitte l'application"""
        self._print("Au revoir!")
        return True

    def do_quit(self, arg):
        """Quitte l'application"""
        return self.do_exit(arg)

    def do_EOF(self, arg):
        """Quitte l'application (Ctrl-D)"""
        return self.do_exit(arg)

    def emptyline(self):
        """Ne fait rien quand la ligne est vide"""
        pass
