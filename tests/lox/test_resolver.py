"""Tests for the Lox resolver."""

import io

from lox import LoxErrorReporter, LoxInterpreter, LoxResolver
from lox.lox_ast import LoxBlockStmt, LoxPrintStmt


class TestLoxResolverErrors:
    """Test static scoping errors."""

    def test_redeclare_in_local_scope(self, lox, helpers):
        """Test that a block cannot declare the same name twice."""
        helpers.assert_compile_error(
            lox,
            "{ var a = 1; var a = 2; }",
            ["[line 1] Error at 'a': Already a variable with this name in this scope."]
        )

    def test_duplicate_parameter(self, lox, helpers):
        """Test that parameters share the function's scope."""
        helpers.assert_compile_error(
            lox,
            "fun f(a, a) {}",
            ["[line 1] Error at 'a': Already a variable with this name in this scope."]
        )

    def test_read_in_own_initializer(self, lox, helpers):
        """Test that a local cannot refer to itself while being initialized."""
        helpers.assert_compile_error(
            lox,
            "var a = 1;\n{ var a = a; }",
            ["[line 2] Error at 'a': Can't read local variable in its own initializer."]
        )

    def test_top_level_return(self, lox, helpers):
        """Test that return is only allowed inside a function."""
        helpers.assert_compile_error(
            lox,
            "return 1;",
            ["[line 1] Error at 'return': Can't return from top-level code."]
        )

    def test_return_in_block_at_top_level(self, lox, helpers):
        """Test that a block does not count as a function body."""
        helpers.assert_compile_error(
            lox,
            "{ return; }",
            ["[line 1] Error at 'return': Can't return from top-level code."]
        )

    def test_all_resolution_errors_reported(self, lox, helpers):
        """Test that resolution keeps going after the first error."""
        helpers.assert_compile_error(
            lox,
            "return 1;\n{ var b; var b; }",
            [
                "[line 1] Error at 'return': Can't return from top-level code.",
                "[line 2] Error at 'b': Already a variable with this name in this scope.",
            ]
        )

    def test_resolution_skipped_after_parse_errors(self, lox, helpers):
        """Test that resolver errors are not reported for a program that failed to parse."""
        helpers.assert_compile_error(
            lox,
            "return 1;\nprint ;",
            ["[line 2] Error at ';': Expect expression."]
        )

    def test_program_never_runs_after_resolution_error(self, lox, helpers):
        """Test that a resolution error stops a program that would otherwise loop forever."""
        helpers.assert_compile_error(
            lox,
            "print \"start\";\nwhile (true) {}\nreturn;",
            ["[line 3] Error at 'return': Can't return from top-level code."]
        )


class TestLoxResolverGlobals:
    """Test that the global scope is left to runtime lookup."""

    def test_global_self_reference_is_runtime_error(self, lox, helpers):
        """Test that a global initializer may mention the global being defined."""
        helpers.assert_runtime_error(lox, "var a = a;", "Undefined variable 'a'.", 1)

    def test_global_forward_reference_in_function(self, lox, helpers):
        """Test that functions may use globals declared after them."""
        helpers.assert_prints(lox, "fun f() { return later; } var later = 7; print f();", ["7"])

    def test_mutual_recursion_between_globals(self, lox, helpers):
        """Test two global functions calling each other."""
        source = """
        fun is_even(n) { if (n == 0) return true; return is_odd(n - 1); }
        fun is_odd(n) { if (n == 0) return false; return is_even(n - 1); }
        print is_even(10);
        print is_odd(7);
        """
        helpers.assert_prints(lox, source, ["true", "true"])


class TestLoxResolverDepths:
    """Test the scope distances recorded for local references."""

    def _resolve(self, helpers, source):
        statements, _ = helpers.parse(source)
        reporter = LoxErrorReporter(io.StringIO())
        interpreter = LoxInterpreter(output=io.StringIO(), error_reporter=reporter)
        LoxResolver(interpreter, reporter).resolve(statements)
        return statements, interpreter, reporter

    def test_globals_not_recorded(self, helpers):
        """Test that top-level references are left out of the table."""
        _, interpreter, reporter = self._resolve(helpers, "var a = 1; print a; a = 2;")
        assert not reporter.had_error
        assert interpreter.locals == {}

    def test_nested_block_distance(self, helpers):
        """Test the distance from an inner block to an outer local."""
        statements, interpreter, _ = self._resolve(helpers, "{ var a = 1; { print a; } }")
        outer = statements[0]
        assert isinstance(outer, LoxBlockStmt)
        inner = outer.statements[1]
        assert isinstance(inner, LoxBlockStmt)
        print_stmt = inner.statements[0]
        assert isinstance(print_stmt, LoxPrintStmt)
        assert interpreter.locals == {print_stmt.expression.node_id: 1}

    def test_same_name_resolves_per_position(self, helpers):
        """Test that equal references in different scopes get different distances."""
        statements, interpreter, _ = self._resolve(helpers, "{ var a = 1; print a; { print a; } }")
        outer = statements[0]
        first = outer.statements[1].expression
        second = outer.statements[2].statements[0].expression
        assert first == second
        assert interpreter.locals[first.node_id] == 0
        assert interpreter.locals[second.node_id] == 1

    def test_function_parameter_distance(self, helpers):
        """Test that a parameter read from a nested closure is one scope out."""
        statements, interpreter, _ = self._resolve(
            helpers, "fun outer(x) { fun inner() { return x; } return x; }"
        )
        outer = statements[0]
        inner = outer.body[0]
        inner_return = inner.body[0]
        outer_return = outer.body[1]
        assert interpreter.locals[inner_return.value.node_id] == 1
        assert interpreter.locals[outer_return.value.node_id] == 0

    def test_assignment_recorded(self, helpers):
        """Test that assignments to locals are recorded like reads."""
        statements, interpreter, _ = self._resolve(helpers, "{ var a; a = 1; }")
        assign = statements[0].statements[1].expression
        assert interpreter.locals == {assign.node_id: 0}
