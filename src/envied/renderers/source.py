"""A minimal Python syntax model for code generation.

Declarations are built as node objects and turned into text by a single
:meth:`Module.render` pass, which owns indentation and blank-line spacing.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

INDENT = "    "


def comment_text(text: str) -> str:
    """Escape characters that would end a ``#`` comment line."""
    return "".join(ch if ch.isprintable() else repr(ch)[1:-1] for ch in text)


def _indent(lines: list[str], level: int) -> list[str]:
    prefix = INDENT * level
    return [f"{prefix}{line}" if line else "" for line in lines]


class Node(ABC):
    """A renderable declaration or statement."""

    #: Compound nodes (classes, functions) are separated by extra blank lines.
    compound = False

    @abstractmethod
    def lines(self) -> list[str]:
        """Render this node as unindented lines."""
        ...


class Statement(Node):
    """A literal statement line, e.g. ``return self.PORT``."""

    def __init__(self, text: str):
        self.text = text

    def lines(self) -> list[str]:
        return [self.text]


class Import(Node):
    """``import x`` or ``from x import a, b``."""

    def __init__(
        self,
        module: str,
        names: Sequence[str] = (),
        alias: str | None = None,
        group: int = 0,
    ):
        self.module = module
        self.names = list(names)
        self.alias = alias
        self.group = group

    def lines(self) -> list[str]:
        if self.names:
            return [f"from {self.module} import {', '.join(self.names)}"]
        if self.alias:
            return [f"import {self.module} as {self.alias}"]
        return [f"import {self.module}"]


class Assign(Node):
    """``name = expr`` with an optional leading comment."""

    def __init__(self, name: str, expr: str, comment: str | None = None):
        self.name = name
        self.expr = expr
        self.comment = comment

    def lines(self) -> list[str]:
        out = [f"# {comment_text(self.comment)}"] if self.comment else []
        out.extend(f"{self.name} = {self.expr}".split("\n"))
        return out


class AnnAssign(Node):
    """``name: annotation`` (class attribute declaration)."""

    def __init__(self, name: str, annotation: str):
        self.name = name
        self.annotation = annotation

    def lines(self) -> list[str]:
        return [f"{self.name}: {self.annotation}"]


class Call(Node):
    """A multi-line call expression used as a statement (``return cls(...)``)."""

    def __init__(self, prefix: str, arguments: Sequence[tuple[str, str]]):
        self.prefix = prefix
        self.arguments = list(arguments)

    def lines(self) -> list[str]:
        if not self.arguments:
            return [f"{self.prefix}()"]
        out = [f"{self.prefix}("]
        out.extend(f"{INDENT}{name}={value}," for name, value in self.arguments)
        out.append(")")
        return out


def _docstring(text: str | None) -> list[str]:
    if not text:
        return []
    # repr() picks double quotes only for text without '"'
    body = repr(text)[1:-1].replace('"', '\\"')
    return [f'"""{body}"""']


class FunctionDef(Node):
    """A function or method definition."""

    compound = True

    def __init__(
        self,
        name: str,
        params: Sequence[str] = (),
        returns: str | None = None,
        body: Sequence[Node] = (),
        decorators: Sequence[str] = (),
        docstring: str | None = None,
    ):
        self.name = name
        self.params = list(params)
        self.returns = returns
        self.body = list(body)
        self.decorators = list(decorators)
        self.docstring = docstring

    def lines(self) -> list[str]:
        out = [f"@{d}" for d in self.decorators]
        signature = f"def {self.name}({', '.join(self.params)})"
        if self.returns:
            signature += f" -> {self.returns}"
        body: list[str] = _docstring(self.docstring)
        for node in self.body:
            body.extend(node.lines())
        if not body:
            out.append(f"{signature}: ...")
            return out
        out.append(f"{signature}:")
        out.extend(_indent(body, 1))
        return out


class ClassDef(Node):
    """A class definition; methods are separated by one blank line."""

    compound = True

    def __init__(
        self,
        name: str,
        bases: Sequence[str] = (),
        body: Sequence[Node] = (),
        decorators: Sequence[str] = (),
        docstring: str | None = None,
    ):
        self.name = name
        self.bases = list(bases)
        self.body = list(body)
        self.decorators = list(decorators)
        self.docstring = docstring

    def lines(self) -> list[str]:
        out = [f"@{d}" for d in self.decorators]
        header = f"class {self.name}"
        if self.bases:
            header += f"({', '.join(self.bases)})"
        out.append(f"{header}:")

        body: list[str] = _docstring(self.docstring)
        previous: Node | None = None
        for node in self.body:
            if body and (previous is None or node.compound or previous.compound):
                body.append("")
            body.extend(node.lines())
            previous = node
        out.extend(_indent(body or ["pass"], 1))
        return out


def _separate(previous: Node | None, node: Node) -> bool:
    if previous is None or type(node) is not type(previous):
        return True
    if isinstance(node, Import) and isinstance(previous, Import):
        return node.group != previous.group
    return isinstance(node, Assign)


class Module(Node):
    """A complete source file."""

    def __init__(
        self,
        header: Sequence[str] = (),
        docstring: str | None = None,
        body: Sequence[Node] = (),
    ):
        self.header = list(header)
        self.docstring = docstring
        self.body = list(body)

    def add(self, *nodes: Node) -> "Module":
        """Append declarations in order."""
        self.body.extend(nodes)
        return self

    def lines(self) -> list[str]:
        out = [f"# {comment_text(h)}" for h in self.header]
        if self.docstring:
            if out:
                out.append("")
            out.extend(_docstring(self.docstring))

        previous: Node | None = None
        for node in self.body:
            if out:
                if node.compound or (previous is not None and previous.compound):
                    out.extend(["", ""])
                elif _separate(previous, node):
                    out.append("")
            out.extend(node.lines())
            previous = node
        return out

    def render(self) -> str:
        """Render the module as text ending in a single newline."""
        return "\n".join(self.lines()).rstrip("\n") + "\n"
