import io
import unittest

from polycalc import polynomials as P
from polycalc.evaluator import Evaluator
from polycalc.stack import PolyStack
from polycalc.syntax_tools import pprint

def evaluate(text):
    """Run `text` through a fresh evaluator; return (stdout, stderr, stack)."""
    out = io.StringIO()
    err = io.StringIO()
    ev = Evaluator(out=out, err=err)
    ev.run(io.StringIO(text))
    return out.getvalue(), err.getvalue(), ev.stack

class TestScenarios(unittest.TestCase):

    def test_add_deg_at(self):
        out, err, stack = evaluate(
            "(1,0)+(1,2)\n"
            "(2,0)\n"
            "ADD\n"
            "PRINT\n"
            "DEG\n"
            "AT 3\n"
            "IS_COEFF\n"
            "PRINT\n")
        # 3 + 3^2
        self.assertEqual(out, "(3,0)+(1,2)\n2\n1\n12\n")
        self.assertEqual(err, "")
        self.assertEqual(len(stack), 1)

    def test_underflow(self):
        out, err, stack = evaluate("ADD\n")
        self.assertEqual(out, "")
        self.assertEqual(err, "ERROR 1 STACK UNDERFLOW\n")
        self.assertTrue(stack.is_empty())

    def test_underflow_keeps_stack(self):
        out, err, stack = evaluate("1\nMUL\nSUB\nIS_EQ\nPRINT\n")
        self.assertEqual(err,
            "ERROR 2 STACK UNDERFLOW\n"
            "ERROR 3 STACK UNDERFLOW\n"
            "ERROR 4 STACK UNDERFLOW\n")
        self.assertEqual(out, "1\n")
        self.assertEqual(len(stack), 1)

    def test_every_command_underflows_on_empty_stack(self):
        commands = ["IS_COEFF", "IS_ZERO", "CLONE", "ADD", "MUL", "NEG", "SUB",
                    "IS_EQ", "DEG", "PRINT", "POP", "DEG_BY 0", "AT 1", "COMPOSE 0"]
        out, err, stack = evaluate("\n".join(commands) + "\n")
        self.assertEqual(out, "")
        self.assertEqual(err, "".join(
            "ERROR {} STACK UNDERFLOW\n".format(i + 1) for i in range(len(commands))))

    def test_sub_order(self):
        out, err, stack = evaluate("5\n3\nSUB\nPRINT\n")
        self.assertEqual(out, "-2\n")

    def test_simple_commands(self):
        out, err, stack = evaluate(
            "ZERO\n"
            "IS_ZERO\n"
            "(1,1)\n"
            "CLONE\n"
            "IS_EQ\n"
            "NEG\n"
            "IS_EQ\n"
            "PRINT\n"
            "MUL\n"
            "PRINT\n"
            "IS_ZERO\n"
            "ADD\n"
            "PRINT\n"
            "POP\n"
            "IS_ZERO\n")
        self.assertEqual(err, "ERROR 15 STACK UNDERFLOW\n")
        self.assertEqual(out, "1\n1\n0\n(-1,1)\n(-1,2)\n0\n(-1,2)\n")
        self.assertTrue(stack.is_empty())

    def test_deg_by(self):
        out, err, stack = evaluate("((1,3),2)\nDEG_BY 0\nDEG_BY 1\nDEG_BY 5\nDEG_BY 18446744073709551615\nZERO\nDEG_BY 0\nDEG\n")
        self.assertEqual(out, "2\n3\n0\n0\n-1\n-1\n")
        self.assertEqual(err, "")

    def test_at(self):
        out, err, stack = evaluate("(1,0)+((1,1),1)\nAT 2\nPRINT\nAT -1\nPRINT\nAT 9\nPRINT\n")
        self.assertEqual(out, "(1,0)+(2,1)\n-1\n-1\n")

    def test_compose(self):
        out, err, stack = evaluate("(1,0)+(1,1)\n(1,2)\nCOMPOSE 1\nPRINT\n")
        self.assertEqual(out, "(1,0)+(2,1)+(1,2)\n")
        self.assertEqual(len(stack), 1)

    def test_compose_operand_order(self):
        # deepest value substitutes x0: 3^2 * 4
        out, err, stack = evaluate("3\n4\n((1,1),2)\nCOMPOSE 2\nPRINT\n")
        self.assertEqual(out, "36\n")
        self.assertEqual(len(stack), 1)

    def test_compose_zero(self):
        out, err, stack = evaluate("(5,0)+(1,1)\nCOMPOSE 0\nPRINT\n")
        self.assertEqual(out, "5\n")

    def test_compose_underflow(self):
        out, err, stack = evaluate("(1,1)\nCOMPOSE 1\n1\n2\nCOMPOSE 18446744073709551615\nPRINT\n")
        self.assertEqual(err,
            "ERROR 2 STACK UNDERFLOW\n"
            "ERROR 5 STACK UNDERFLOW\n")
        self.assertEqual(out, "2\n")
        self.assertEqual(len(stack), 3)

    def test_deeply_nested_polynomial(self):
        depth = 1000
        s = "(" * depth + "1" + ",1)" * depth
        out, err, stack = evaluate(s + "\nPRINT\nCLONE\nIS_EQ\nMUL\nDEG\nZERO\nPRINT\n")
        self.assertEqual(out, s + "\n1\n{}\n0\n".format(2 * depth))
        self.assertEqual(err, "")
        self.assertEqual(len(stack), 2)

class TestDiagnostics(unittest.TestCase):

    def assertErrors(self, text, *messages):
        out, err, stack = evaluate(text)
        self.assertEqual(err, "".join(m + "\n" for m in messages))
        return out, stack

    def test_comments_and_empty_lines(self):
        out, stack = self.assertErrors("# ADD\n\n#\n1\n\nPRINT\n")
        self.assertEqual(out, "1\n")

    def test_wrong_command(self):
        self.assertErrors("ADDX\nadd\nADD \nDEGX\nPRINTT\nZ\n",
            "ERROR 1 WRONG COMMAND",
            "ERROR 2 WRONG COMMAND",
            "ERROR 3 WRONG COMMAND",
            "ERROR 4 WRONG COMMAND",
            "ERROR 5 WRONG COMMAND",
            "ERROR 6 WRONG COMMAND")

    def test_deg_by_arguments(self):
        self.assertErrors(
            "DEG_BY\nDEG_BY \nDEG_BY -1\nDEG_BY +1\nDEG_BY a\nDEG_BY 1 \nDEG_BY  1\n"
            "DEG_BY 18446744073709551616\nDEG_BYX\nDEG_BY\t1\n",
            "ERROR 1 DEG BY WRONG VARIABLE",
            "ERROR 2 DEG BY WRONG VARIABLE",
            "ERROR 3 DEG BY WRONG VARIABLE",
            "ERROR 4 DEG BY WRONG VARIABLE",
            "ERROR 5 DEG BY WRONG VARIABLE",
            "ERROR 6 DEG BY WRONG VARIABLE",
            "ERROR 7 DEG BY WRONG VARIABLE",
            "ERROR 8 DEG BY WRONG VARIABLE",
            "ERROR 9 WRONG COMMAND",
            "ERROR 10 WRONG COMMAND")

    def test_at_arguments(self):
        self.assertErrors(
            "AT\nAT \nAT x\nAT +1\nAT --1\nAT 1-\nAT 9223372036854775808\nAT -9223372036854775809\nATX\n",
            "ERROR 1 AT WRONG VALUE",
            "ERROR 2 AT WRONG VALUE",
            "ERROR 3 AT WRONG VALUE",
            "ERROR 4 AT WRONG VALUE",
            "ERROR 5 AT WRONG VALUE",
            "ERROR 6 AT WRONG VALUE",
            "ERROR 7 AT WRONG VALUE",
            "ERROR 8 AT WRONG VALUE",
            "ERROR 9 WRONG COMMAND")

    def test_at_extreme_values(self):
        out, stack = self.assertErrors("(1,1)\nAT -9223372036854775808\nPRINT\n")
        self.assertEqual(out, "-9223372036854775808\n")

    def test_compose_arguments(self):
        self.assertErrors("COMPOSE\nCOMPOSE -1\nCOMPOSE x\nCOMPOSEX\n",
            "ERROR 1 COMPOSE WRONG PARAMETER",
            "ERROR 2 COMPOSE WRONG PARAMETER",
            "ERROR 3 COMPOSE WRONG PARAMETER",
            "ERROR 4 WRONG COMMAND")

    def test_argument_checked_before_stack(self):
        self.assertErrors("AT x\nAT 1\n",
            "ERROR 1 AT WRONG VALUE",
            "ERROR 2 STACK UNDERFLOW")

    def test_wrong_poly(self):
        out, stack = self.assertErrors(
            "(1,2\n 1\n1 \n(1,2)+\n(1,-1)\n(1,2)x\n-\n(1,2147483648)\n9223372036854775808\n",
            "ERROR 1 WRONG POLY",
            "ERROR 2 WRONG POLY",
            "ERROR 3 WRONG POLY",
            "ERROR 4 WRONG POLY",
            "ERROR 5 WRONG POLY",
            "ERROR 6 WRONG POLY",
            "ERROR 7 WRONG POLY",
            "ERROR 8 WRONG POLY",
            "ERROR 9 WRONG POLY")
        self.assertTrue(stack.is_empty())

    def test_nul_characters(self):
        self.assertErrors("AT\x00\nAT 1\x00\nADD\x00\n1\x00\n(1,1)\x00\n",
            "ERROR 1 WRONG COMMAND",
            "ERROR 2 AT WRONG VALUE",
            "ERROR 3 WRONG COMMAND",
            "ERROR 4 WRONG POLY",
            "ERROR 5 WRONG POLY")

    def test_last_line_without_newline(self):
        out, stack = self.assertErrors("7\nPRINT")
        self.assertEqual(out, "7\n")

    def test_process_after_errors(self):
        out, stack = self.assertErrors("(1,2\n(1,2)\nFOO\nPRINT\n",
            "ERROR 1 WRONG POLY",
            "ERROR 3 WRONG COMMAND")
        self.assertEqual(out, "(1,2)\n")

class TestStack(unittest.TestCase):

    def test_lifo(self):
        s = PolyStack()
        self.assertTrue(s.is_empty())
        s.push(P.ONE)
        s.push(P.ZERO)
        self.assertEqual(len(s), 2)
        self.assertEqual(s.top(), P.ZERO)
        self.assertEqual(s.prev_top(), P.ONE)
        self.assertEqual(list(s), [P.ZERO, P.ONE])
        self.assertFalse(s.underflow(2))
        self.assertTrue(s.underflow(3))
        self.assertEqual(s.pop(), P.ZERO)
        s.clear()
        self.assertTrue(s.is_empty())

    def test_shared_stack(self):
        stack = PolyStack([P.variable(0)])
        out = io.StringIO()
        Evaluator(out=out, err=io.StringIO(), stack=stack).run(["PRINT\n", "CLONE\n"])
        self.assertEqual(out.getvalue(), "(1,1)\n")
        self.assertEqual(len(stack), 2)
        self.assertEqual(pprint(stack.top()), "(1,1)")

if __name__ == '__main__':
    unittest.main()
