"""
linebasic Reader / Parser

Reads a single source line into a Statement.

SourceReader is a cursor over the characters of one line. Statements are
recognised by their leading keyword; expressions are read by recursive
descent with one function per precedence level:

    expression := term (('+'|'-') term)*
    term       := factor (('*'|'/') factor)*
    factor     := variable | call | ['-'] number | '(' expression ')'

Parenthesis depth is tracked on the reader. A line is only accepted if the
whole line was consumed and the depth is back to zero.

Key functions:
- parse: parse a statement with no line number
- parse_line: parse a line that may start with a line number
"""

from __future__ import annotations

import math
from typing import Callable, Dict, List, Optional, Tuple

from linebasic.errors import BasicSyntaxError
from linebasic.language import statement as st
from linebasic.language.expression import (
    ArithOp,
    BinaryOp,
    Call,
    Condition,
    Expression,
    NumericLiteral,
    Relop,
    StringLiteral,
    Variable,
)
from linebasic.language.statement import Keyword, Statement
from linebasic.language.values import Float, Integer, Number


class SourceReader:
    """
    Tracks the parsing of a single statement.

    Attributes:
        line: the source line, without its line terminator
        idx: index of the character currently being examined
        depth: current parenthesis depth; must be 0 for a balanced line
    """

    def __init__(self, line: str):
        self.line = line.rstrip("\r\n")
        self.idx = 0
        self.depth = 0
        self._statement_parsers: Dict[str, Callable[[], Statement]] = {
            Keyword.REM.value: self._parse_rem,
            Keyword.PRINT.value: self._parse_print,
            Keyword.LET.value: self._parse_let,
            Keyword.IF.value: self._parse_if,
            Keyword.GOTO.value: lambda: st.Goto(self.get_integer()),
            Keyword.INPUT.value: lambda: st.Input(self.get_variable()),
            Keyword.GOSUB.value: lambda: st.Gosub(self.get_integer()),
            Keyword.RETURN.value: st.Return,
            Keyword.FOR.value: self._parse_for,
            Keyword.NEXT.value: self._parse_next,
            Keyword.LIST.value: st.List,
            Keyword.RUN.value: st.Run,
            Keyword.LOAD.value: lambda: st.Load(self.get_string()),
            Keyword.SAVE.value: lambda: st.Save(self.get_string()),
            Keyword.CLEAR.value: st.ClearVars,
            Keyword.END.value: st.End,
        }

    #---------------------------------------------------------------------------
    # Cursor primitives
    #---------------------------------------------------------------------------

    def ch(self) -> str:
        """Get the character at the current point, or '' at end of line."""
        if self.idx < len(self.line):
            return self.line[self.idx]
        return ""

    def at_end(self) -> bool:
        return self.idx >= len(self.line)

    def advance(self) -> None:
        self.idx += 1

    def skip_ws(self) -> None:
        while not self.at_end() and self.ch().isspace():
            self.advance()

    def is_digit(self) -> bool:
        c = self.ch()
        return c != "" and "0" <= c <= "9"

    def is_alpha(self) -> bool:
        return self.ch().isalpha()

    def expect(self, token: str) -> None:
        """Skip past a punctuation token, or fail if it isn't next."""
        self.skip_ws()
        if not self.line.startswith(token, self.idx):
            raise BasicSyntaxError(f"Expected {token}")
        self.idx += len(token)
        self.skip_ws()

    def expect_keyword(self, keyword: Keyword) -> None:
        """Skip past a keyword, or fail if the next word is anything else."""
        if self.get_word() != keyword.value:
            raise BasicSyntaxError(f"Expected {keyword.value}")

    def enter_group(self) -> None:
        self.depth += 1

    def exit_group(self) -> None:
        if self.depth == 0:
            raise BasicSyntaxError("Too many ')'")
        self.depth -= 1

    #---------------------------------------------------------------------------
    # Tokens
    #---------------------------------------------------------------------------

    def get_word(self) -> str:
        """Get the maximal run of alphabetic characters at the current point."""
        self.skip_ws()
        start_at = self.idx
        while self.is_alpha():
            self.advance()
        word = self.line[start_at:self.idx]
        self.skip_ws()
        return word

    def get_integer(self) -> int:
        """Get a value that can only be a whole number (e.g. a line number)."""
        self.skip_ws()
        start_at = self.idx
        while self.is_digit():
            self.advance()
        text = self.line[start_at:self.idx]
        self.skip_ws()

        if not text:
            raise BasicSyntaxError("Expected line number")
        return int(text)

    def get_number(self) -> Number:
        """Get an Integer or Float at the current point."""
        self.skip_ws()
        start_at = self.idx
        while self.is_digit() or self.ch() == ".":
            self.advance()
        text = self.line[start_at:self.idx]
        self.skip_ws()

        try:
            return Integer(int(text))
        except ValueError:
            pass
        try:
            value = float(text)
        except ValueError:
            raise BasicSyntaxError("Error reading number") from None
        if not math.isfinite(value):
            raise BasicSyntaxError("Number too large")
        return Float(value)

    def get_string(self) -> str:
        """Get the contents of a string delimited by double quotes."""
        self.skip_ws()
        if self.ch() != '"':
            raise BasicSyntaxError('Expected "')
        self.advance()

        start_at = self.idx
        while self.ch() != '"':
            if self.at_end() or self.ch() == "\n":
                raise BasicSyntaxError("Unterminated string")
            self.advance()
        text = self.line[start_at:self.idx]

        # Closing quote
        self.advance()
        self.skip_ws()
        return text

    def get_text(self) -> str:
        """Get everything between the current point and the end of the line."""
        self.skip_ws()
        text = self.line[self.idx:].rstrip()
        self.idx = len(self.line)
        return text

    def get_variable(self) -> str:
        """Get a single-letter variable name."""
        self.skip_ws()
        if not self.is_alpha():
            raise BasicSyntaxError("Expected a variable name")
        name = self.ch()
        self.advance()
        self.skip_ws()
        return name

    def get_relop(self) -> Relop:
        self.skip_ws()
        text = ""
        if self.ch() == "=":
            text = "="
        elif self.ch() == "<":
            text = "<"
            if self.line.startswith(("<=", "<>"), self.idx):
                text = self.line[self.idx:self.idx + 2]
        elif self.ch() == ">":
            text = ">"
            if self.line.startswith(">=", self.idx):
                text = ">="

        if not text:
            raise BasicSyntaxError("Relational operator not recognised")
        self.idx += len(text)
        self.skip_ws()
        return Relop(text)

    #---------------------------------------------------------------------------
    # Expressions
    #---------------------------------------------------------------------------

    def get_expression(self) -> Expression:
        """Get a numeric expression at the current point."""
        root = self.get_term()
        while True:
            self.skip_ws()
            if self.ch() not in ("+", "-"):
                return root
            op = ArithOp(self.ch())
            self.advance()
            root = BinaryOp(op, root, self.get_term())

    def get_term(self) -> Expression:
        root = self.get_factor()
        while True:
            self.skip_ws()
            if self.ch() not in ("*", "/"):
                return root
            op = ArithOp(self.ch())
            self.advance()
            root = BinaryOp(op, root, self.get_factor())

    def get_factor(self) -> Expression:
        self.skip_ws()
        if self.at_end():
            raise BasicSyntaxError("Unexpected end of line")

        # Variable or function call
        if self.is_alpha():
            start_at = self.idx
            while self.is_alpha():
                self.advance()
            name = self.line[start_at:self.idx]
            if len(name) == 1:
                self.skip_ws()
                return Variable(name)
            return Call(name, tuple(self._get_arguments()))

        # Possibly negative number
        if self.ch() == "-":
            self.advance()
            self.skip_ws()
            if not self.is_digit():
                raise BasicSyntaxError("Error in expression")
            return NumericLiteral(-self.get_number())

        if self.is_digit():
            return NumericLiteral(self.get_number())

        # Subexpression
        if self.ch() == "(":
            self.advance()
            self.enter_group()
            inner = self.get_expression()
            self._close_group()
            return inner

        raise BasicSyntaxError("Error in expression")

    def _get_arguments(self) -> List[Expression]:
        self.expect("(")
        self.enter_group()

        args: List[Expression] = []
        if self.ch() == ")":
            self._close_group()
            return args

        while True:
            args.append(self.get_expression())
            self.skip_ws()
            if self.ch() != ",":
                break
            self.advance()

        self._close_group()
        return args

    def _close_group(self) -> None:
        # An unclosed group at end of line is left for the balance check
        # in build_statement.
        self.skip_ws()
        if self.at_end():
            return
        if self.ch() != ")":
            raise BasicSyntaxError("Expected )")
        self.advance()
        self.exit_group()
        self.skip_ws()

    #---------------------------------------------------------------------------
    # Statements
    #---------------------------------------------------------------------------

    def build_statement(self) -> Statement:
        """Compile the rest of the line into a Statement."""
        statement = self.get_statement()

        # Post compile checks
        if not self.at_end():
            raise BasicSyntaxError("Unexpected token")
        if self.depth != 0:
            raise BasicSyntaxError("Invalid expression")

        return statement

    def get_statement(self) -> Statement:
        keyword = self.get_word()

        statement_parser = self._statement_parsers.get(keyword)
        if statement_parser is not None:
            return statement_parser()

        if len(keyword) == 0:
            # Did it fail because the line is empty?
            if self.at_end():
                return st.Empty()
            raise BasicSyntaxError("Unknown keyword")

        if len(keyword) == 1:
            # Assignment without LET
            return self._parse_assignment(keyword)

        raise BasicSyntaxError(f"Unknown keyword {keyword}")

    def _parse_rem(self) -> Statement:
        return st.Comment(self.get_text())

    def _parse_print(self) -> Statement:
        args: List[Expression] = []
        self.skip_ws()
        if self.at_end():
            return st.Print(())

        while True:
            if self.ch() == '"':
                args.append(StringLiteral(self.get_string()))
            else:
                args.append(self.get_expression())
            self.skip_ws()

            # More?
            if self.ch() != ",":
                break
            self.advance()
            self.skip_ws()

        return st.Print(tuple(args))

    def _parse_let(self) -> Statement:
        return self._parse_assignment(self.get_variable())

    def _parse_assignment(self, var: str) -> Statement:
        self.expect("=")
        return st.Let(var, self.get_expression())

    def _parse_if(self) -> Statement:
        left = self.get_expression()
        relop = self.get_relop()
        right = self.get_expression()
        self.expect_keyword(Keyword.THEN)

        # THEN <line> is shorthand for THEN GOTO <line>; otherwise the
        # consequent is a complete statement of its own.
        if self.is_digit():
            consequent: Statement = st.Goto(self.get_integer())
        else:
            consequent = self.get_statement()

        return st.If(Condition(left, relop, right), consequent)

    def _parse_for(self) -> Statement:
        var = self.get_variable()
        self.expect("=")
        start = self.get_expression()
        self.expect_keyword(Keyword.TO)
        end = self.get_expression()
        self.skip_ws()

        step: Optional[Expression] = None
        if not self.at_end():
            self.expect_keyword(Keyword.STEP)
            step = self.get_expression()

        return st.For(var, start, end, step)

    def _parse_next(self) -> Statement:
        self.skip_ws()
        if self.is_alpha():
            return st.Next(self.get_variable())
        return st.Next()


def parse(line: str) -> Statement:
    """Parse one line of source text that carries no line number."""
    return SourceReader(line).build_statement()


def parse_line(line: str) -> Tuple[Optional[int], Statement]:
    """
    Parse one line of source text, splitting off a leading line number.

    Returns:
        (line_number, statement); line_number is None for an immediate
        command. Syntax errors in a numbered line carry that line number.
    """
    reader = SourceReader(line)
    reader.skip_ws()

    line_number: Optional[int] = None
    if reader.is_digit():
        line_number = reader.get_integer()

    try:
        return line_number, reader.build_statement()
    except BasicSyntaxError as e:
        if line_number is not None:
            e.at_line(line_number)
        raise
