from lam.compiler.compiler import compile_module
from lam.compiler.disasm import disassemble
from lam.compiler.opcodes import Instruction, Opcode
from lam.reader.parser import parse


def test_straight_line_code():
    assert disassemble(compile_module(parse("let x = 1 in x"))) == (
        "0000: PUSH_INT 1\n"
        "0001: PUSH_SCOPE\n"
        "0002: ACCESS 0\n"
        "0003: POP_SCOPE"
    )


def test_closure_body_is_indented():
    assert disassemble(compile_module(parse("fun x -> x"))) == (
        "0000: MAKE_CLOSURE\n"
        "      0000: ACCESS 1\n"
        "      0001: RETURN_FROM_CALL"
    )


def test_branch_arms_are_labelled():
    assert disassemble(compile_module(parse("if true then 1 else 2"))) == (
        "0000: PUSH_BOOL true\n"
        "0001: BRANCH\n"
        "      then:\n"
        "        0000: PUSH_INT 1\n"
        "      else:\n"
        "        0000: PUSH_INT 2"
    )


def test_empty_arm():
    code = (Instruction(Opcode.BRANCH, (), (Instruction(Opcode.PUSH_BOOL, False),)),)
    assert disassemble(code) == (
        "0000: BRANCH\n"
        "      then:\n"
        "        <empty>\n"
        "      else:\n"
        "        0000: PUSH_BOOL false"
    )


def test_empty_program():
    assert disassemble(()) == ""
