from __future__ import annotations

from .opcodes import Code, Opcode


def disassemble(code: Code, indent: int = 0) -> str:
    """Render code one instruction per line; nested bodies are indented under their owner."""
    out: list[str] = []
    pad = " " * indent
    for i, ins in enumerate(code):
        line = f"{pad}{i:04d}: {ins.op.name}"
        if ins.op == Opcode.MAKE_CLOSURE:
            out.append(line)
            out.append(disassemble(ins.arg, indent + 6) if ins.arg else f"{pad}      <empty>")
            continue
        if ins.op == Opcode.BRANCH:
            out.append(line)
            for label, arm in (("then", ins.arg), ("else", ins.alt)):
                out.append(f"{pad}      {label}:")
                out.append(disassemble(arm, indent + 8) if arm else f"{pad}        <empty>")
            continue
        if ins.op == Opcode.PUSH_BOOL:
            line += " true" if ins.arg else " false"
        elif ins.arg is not None:
            line += f" {ins.arg}"
        out.append(line)
    return "\n".join(out)
