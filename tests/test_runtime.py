"""Test runtime components (environment, state, evaluator, executor)."""
import pytest

from linebasic.errors import BasicRuntimeError, ErrorCode
from linebasic.language import statement as st
from linebasic.language.expression import (
    ArithOp,
    BinaryOp,
    Call,
    Condition,
    NumericLiteral,
    Relop,
    StringLiteral,
    Variable,
)
from linebasic.language.parser import parse
from linebasic.language.values import Float, Integer
from linebasic.runtime import signals
from linebasic.runtime.console import BufferedConsole
from linebasic.runtime.environment import Environment
from linebasic.runtime.evaluator import ExpressionEvaluator, FunctionRegistry
from linebasic.runtime.executor import ExecutionConfig, StatementExecutor
from linebasic.runtime.state import ExecutionFrame, LoopFrame


def num(value):
    return NumericLiteral(Integer(value) if isinstance(value, int) else Float(value))


class TestEnvironment:
    """Tests for Environment."""

    def test_set_and_get(self):
        """Test storing and reading a variable."""
        env = Environment()
        env.set("A", Integer(42))
        assert env.get("A") == Integer(42)
        assert "A" in env

    def test_unknown_variable(self):
        """Test reading a variable that was never set."""
        with pytest.raises(BasicRuntimeError) as exc_info:
            Environment().get("Z")
        assert exc_info.value.code == ErrorCode.UNKNOWN_VARIABLE

    def test_clear(self):
        """Test forgetting all variables."""
        env = Environment({"A": Integer(1), "B": Float(2.0)})
        env.clear()
        assert len(env) == 0

    def test_snapshot_restore(self):
        """Test snapshot and restore."""
        env = Environment({"B": Float(0.5), "A": Integer(1)})
        snapshot = env.snapshot()
        assert snapshot == {"A": 1, "B": 0.5}

        other = Environment()
        other.restore(snapshot)
        assert isinstance(other.get("A"), Integer)
        assert isinstance(other.get("B"), Float)


class TestExecutionFrame:
    """Tests for ExecutionFrame and LoopFrame."""

    def test_fresh_frame(self):
        """Test initial control state."""
        frame = ExecutionFrame()
        assert frame.pc == 0
        assert frame.call_stack == []
        assert frame.loop_stack == []
        assert frame.running is True
        assert frame.innermost_loop() is None

    def test_loop_frame_finished(self):
        """Test the loop boundary check in both directions."""
        up = LoopFrame("I", 3, 1, 0)
        assert not up.finished(3)
        assert up.finished(4)

        down = LoopFrame("I", 1, -1, 0)
        assert not down.finished(1)
        assert down.finished(0)


class TestExpressionEvaluator:
    """Tests for ExpressionEvaluator."""

    @pytest.fixture
    def evaluator(self):
        return ExpressionEvaluator()

    def test_precedence(self, evaluator, env):
        """Test that 3+4*2 is 11 and (3+4)*2 is 14."""
        assert evaluator.evaluate(parse("PRINT 3+4*2").args[0], env) == Integer(11)
        assert evaluator.evaluate(parse("PRINT (3+4)*2").args[0], env) == Integer(14)

    def test_complex_expression_tree(self, evaluator, env):
        """Test a hand-built tree."""
        expr = BinaryOp(ArithOp.ADD, num(2), BinaryOp(ArithOp.MULTIPLY, num(3), num(4)))
        assert evaluator.evaluate(expr, env) == Integer(14)

    def test_variables(self, evaluator, env):
        """Test variable lookup."""
        env.set("A", Integer(5))
        assert evaluator.evaluate(parse("PRINT A*A-1").args[0], env) == Integer(24)

    def test_unknown_variable(self, evaluator, env):
        """Test lookup failure."""
        with pytest.raises(BasicRuntimeError, match="Unknown variable B"):
            evaluator.evaluate(Variable("B"), env)

    def test_promotion(self, evaluator, env):
        """Test mixed Integer/Float arithmetic."""
        result = evaluator.evaluate(parse("PRINT 1+0.5").args[0], env)
        assert isinstance(result, Float)
        assert result.value == 1.5

    def test_division_by_zero(self, evaluator, env):
        """Test that division by zero surfaces as a runtime error."""
        with pytest.raises(BasicRuntimeError) as exc_info:
            evaluator.evaluate(parse("PRINT 1/0").args[0], env)
        assert exc_info.value.code == ErrorCode.DIVIDE_BY_ZERO

    def test_rnd(self, env):
        """Test RND returns a Float in [0, 1)."""
        import random
        evaluator = ExpressionEvaluator(FunctionRegistry(random.Random(3)))
        for _ in range(50):
            value = evaluator.evaluate(Call("RND"), env)
            assert isinstance(value, Float)
            assert 0.0 <= value.value < 1.0

    def test_int(self, evaluator, env):
        """Test INT truncation."""
        assert evaluator.evaluate(Call("INT", (num(2.9),)), env) == Integer(2)
        assert isinstance(evaluator.evaluate(Call("INT", (num(2.9),)), env), Integer)
        assert evaluator.evaluate(Call("INT", (num(-2.9),)), env) == Integer(-2)
        assert evaluator.evaluate(Call("INT", (num(7),)), env) == Integer(7)

    def test_arity(self, evaluator, env):
        """Test wrong argument counts."""
        with pytest.raises(BasicRuntimeError) as exc_info:
            evaluator.evaluate(Call("INT", ()), env)
        assert exc_info.value.code == ErrorCode.ARITY_ERROR

        with pytest.raises(BasicRuntimeError):
            evaluator.evaluate(Call("RND", (num(1),)), env)

    def test_unknown_function(self, evaluator, env):
        """Test an unregistered function name."""
        with pytest.raises(BasicRuntimeError) as exc_info:
            evaluator.evaluate(Call("SQR", (num(4),)), env)
        assert exc_info.value.code == ErrorCode.UNKNOWN_FUNCTION

    def test_register_function(self, env):
        """Test adding a function to the registry."""
        functions = FunctionRegistry()
        functions.register("ABS", 1, lambda x: x if x.value >= 0 else -x)
        evaluator = ExpressionEvaluator(functions)
        assert evaluator.evaluate(Call("ABS", (num(-3),)), env) == Integer(3)

    def test_string_in_expression(self, evaluator, env):
        """Test that strings can't be evaluated numerically."""
        with pytest.raises(BasicRuntimeError):
            evaluator.evaluate(StringLiteral("x"), env)


class TestStatementExecutor:
    """Tests for StatementExecutor."""

    def test_prints_string(self, executor, console, env):
        """Test PRINT of a string."""
        assert executor.execute(parse('PRINT "Hello, world!"'), env) is None
        assert console.text == "Hello, world!\n"

    def test_print_concatenates_arguments(self, executor, console, env):
        """Test that PRINT joins arguments with no separator."""
        env.set("A", Integer(3))
        executor.execute(parse('PRINT "A=", A, " half=", A/2.0'), env)
        assert console.lines == ["A=3 half=1.5"]

    def test_empty_print(self, executor, console, env):
        """Test PRINT with no arguments."""
        executor.execute(parse("PRINT"), env)
        assert console.text == "\n"

    def test_assigns_variable(self, executor, env):
        """Test LET."""
        assert executor.execute(st.Let("A", num(42)), env) is None
        assert env.get("A") == Integer(42)

    def test_let_rejects_strings(self, executor, env):
        """Test that strings can't be assigned."""
        with pytest.raises(BasicRuntimeError, match="strings"):
            executor.execute(st.Let("A", StringLiteral("no")), env)

    def test_comment_and_empty(self, executor, env):
        """Test statements with no effect."""
        assert executor.execute(st.Comment("x"), env) is None
        assert executor.execute(st.Empty(), env) is None
        assert len(env) == 0

    def test_evaluates_condition(self, executor, env):
        """Test IF with a true condition runs the consequent."""
        env.set("A", Integer(42))
        statement = st.If(Condition(Variable("A"), Relop.EQ, num(42)), st.Let("A", num(69)))
        assert executor.execute(statement, env) is None
        assert env.get("A") == Integer(69)

    def test_false_condition_falls_through(self, executor, env):
        """Test IF with a false condition."""
        env.set("A", Integer(1))
        assert executor.execute(parse("IF A>1 THEN GOTO 50"), env) is None

    def test_if_forwards_signal(self, executor, env):
        """Test that IF returns its consequent's signal."""
        env.set("A", Integer(1))
        assert executor.execute(parse("IF A=1 THEN GOTO 50"), env) == signals.Jump(50)

    def test_if_compares_across_variants(self, executor, env):
        """Test IF comparing an Integer with a Float."""
        env.set("A", Integer(2))
        assert executor.execute(parse("IF A=2.0 THEN END"), env) == signals.End()

    def test_if_rejects_strings(self, executor, env):
        """Test that strings can't be compared."""
        statement = st.If(Condition(StringLiteral("a"), Relop.EQ, num(1)), st.End())
        with pytest.raises(BasicRuntimeError, match="compare strings"):
            executor.execute(statement, env)

    def test_branches_unconditionally(self, executor, env):
        """Test GOTO returns a Jump signal."""
        assert executor.execute(st.Goto(30), env) == signals.Jump(30)

    def test_control_signals(self, executor, env):
        """Test the signal returned by each control statement."""
        assert executor.execute(st.Gosub(100), env) == signals.Call(100)
        assert executor.execute(st.Return(), env) == signals.Return()
        assert executor.execute(st.Next(), env) == signals.EndLoop()
        assert executor.execute(st.Next("I"), env) == signals.EndLoop("I")
        assert executor.execute(st.List(), env) == signals.List()
        assert executor.execute(st.Run(), env) == signals.Run()
        assert executor.execute(st.Load("a.bas"), env) == signals.Load("a.bas")
        assert executor.execute(st.Save("a.bas"), env) == signals.Save("a.bas")
        assert executor.execute(st.ClearVars(), env) == signals.ClearVars()
        assert executor.execute(st.End(), env) == signals.End()

    def test_for_returns_start_loop(self, executor, env):
        """Test FOR evaluates its bounds."""
        env.set("N", Integer(5))
        assert executor.execute(parse("FOR I=1 TO N*2"), env) == signals.StartLoop("I", 1, 10, None)
        assert executor.execute(parse("FOR I=1 TO N STEP 2"), env) == signals.StartLoop("I", 1, 5, 2)

    def test_for_requires_integers(self, executor, env):
        """Test that non-integer bounds are rejected."""
        with pytest.raises(BasicRuntimeError, match="integers"):
            executor.execute(parse("FOR I=1 TO 2.5"), env)
        with pytest.raises(BasicRuntimeError):
            executor.execute(parse("FOR I=1 TO 5 STEP 0.5"), env)

    def test_for_does_not_touch_environment(self, executor, env):
        """Test that FOR leaves loop setup to the engine."""
        executor.execute(parse("FOR I=1 TO 3"), env)
        assert "I" not in env


class TestInput:
    """Tests for INPUT."""

    def make_executor(self, *lines):
        console = BufferedConsole(lines)
        return StatementExecutor(console=console), console

    def test_integer_input(self, env):
        """Test reading an integer."""
        executor, console = self.make_executor(" 12 ")
        executor.execute(st.Input("A"), env)
        assert env.get("A") == Integer(12)
        assert isinstance(env.get("A"), Integer)
        assert console.text == "? "

    def test_float_input(self, env):
        """Test reading a float."""
        executor, _ = self.make_executor("2.5")
        executor.execute(st.Input("A"), env)
        assert isinstance(env.get("A"), Float)

    def test_parse_error(self, env):
        """Test that non-numeric input is a runtime error."""
        executor, _ = self.make_executor("abc")
        with pytest.raises(BasicRuntimeError, match="Parse error"):
            executor.execute(st.Input("A"), env)

    @pytest.mark.parametrize("text", ["inf", "-inf", "nan", "Infinity", "1e999", "1_000", "0x10", ""])
    def test_rejected_replies(self, env, text):
        """Test that non-finite and non-decimal replies are parse errors."""
        executor, _ = self.make_executor(text)
        with pytest.raises(BasicRuntimeError) as exc_info:
            executor.execute(st.Input("A"), env)
        assert exc_info.value.code == ErrorCode.INPUT_ERROR
        assert "A" not in env

    @pytest.mark.parametrize("text,expected", [
        ("-7", Integer(-7)),
        ("+3", Integer(3)),
        ("1e3", Float(1000.0)),
        (".5", Float(0.5)),
        ("2.", Float(2.0)),
    ])
    def test_accepted_replies(self, env, text, expected):
        """Test signed, fractional and exponent replies."""
        executor, _ = self.make_executor(text)
        executor.execute(st.Input("A"), env)
        assert env.get("A") == expected
        assert type(env.get("A")) is type(expected)

    def test_end_of_input(self, env):
        """Test that exhausted input is a runtime error."""
        executor, _ = self.make_executor()
        with pytest.raises(BasicRuntimeError) as exc_info:
            executor.execute(st.Input("A"), env)
        assert exc_info.value.code == ErrorCode.INPUT_ERROR

    def test_custom_prompt(self, env):
        """Test the configured prompt."""
        console = BufferedConsole(["1"])
        executor = StatementExecutor(console=console, config=ExecutionConfig(input_prompt="> "))
        executor.execute(st.Input("A"), env)
        assert console.text == "> "
