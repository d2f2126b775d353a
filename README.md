# qasmsem

`qasmsem` models the semantic layer of OpenQASM 3 programs. It provides a
typed abstract semantic graph (ASG), scoped symbol tables, type promotion
rules, and semantic error lists whose reports point back at the source text.
It has no dependencies outside the standard library.

## Modules

- `qasmsem.types`: the type system. `Type` holds a `TypeKind` and, depending
  on the kind, `bit_width`, `const` (an `IsConst`), `array_dims` (an
  `ArrayDims` of one to three sizes) or `num_params`/`num_qubits` for gates.
  Its methods are `is_scalar`, `width`, `is_const`, `is_quantum` and `dims`.
  `promote_types` gives the common type of two operands of a binary
  operation (void when there is no rule). `can_cast_loose` is a permissive
  cast check that rejects only bit-to-bit.
- `qasmsem.symbols`: `SymbolTable` is a stack of scopes (`ScopeType`) that
  hands out `SymbolId`s. `lookup` returns a `SymbolRecord` (symbol, id and
  scope level). A failed lookup or a redeclaration in the same scope raises
  `SymbolTableError`, whose `error` attribute is a `SymbolError`. `scope` is a
  context manager that enters a scope and leaves it again. `symbol_type`
  returns a record's type, or the undefined type for anything else.
- `qasmsem.exprs`: typed expressions. Every expression (`IntLiteral`,
  `FloatLiteral`, `BoolLiteral`, `BitStringLiteral`, `Identifier`,
  `HardwareQubit`, `IndexedIdentifier`, `IndexExpression`, `ArraySlice`,
  `UnaryExpr`, `BinaryExpr`, `Cast`, `MeasureExpression`, `ReturnExpression`,
  `GateOperand`) becomes a `TExpr` (an expression plus its `typ`) through
  `to_texpr`. `binary_texpr_with_cast` promotes the operand types and wraps
  operands in `Cast` where needed. Gate modifiers are `GateModifier` values
  of a `GateModifierKind`.
- `qasmsem.stmts`: statements (`DeclareClassical`, `DeclareQuantum`,
  `Assignment`, `GateDeclaration`, `GateCall`, `If`, `While`, `ForStmt`,
  `SwitchCaseStmt`, `Barrier`, `Reset`, `Pragma`, `Include`, `AnnotatedStmt`,
  `SimpleStmt` and others) and the `Program` that holds them. A `Program`
  can be iterated, indexed and measured with `len`. It can be printed with
  `print_asg_debug` or `print_asg_debug_pretty`, and its version may be set
  only once. `render_stmt` renders a statement as source text. Only `include`
  has a textual form so far; every other statement renders as `;`.
- `qasmsem.validate`: `walk_symbols` yields the symbol results of
  declarations and of identifiers used as initializers or right-hand sides.
  `count_symbol_errors` counts those that did not resolve.
- `qasmsem.semantic_error`: `SemanticErrorKind`, `SemanticError`, and
  `SemanticErrorList`, which also holds the error lists of included files.
  An error is located by a `SyntaxSpan` (node text plus a `TextRange`).
  `format_errors` and `print_errors` produce compact reports built by
  `report_error`.
- `qasmsem.context`: `Context` gathers the program, the symbol table, the
  errors and any pending annotations while an ASG is built. Its
  `lookup_symbol`, `lookup_gate_symbol` and `new_binding` record the
  matching semantic error and return a `SymbolError` instead of raising.

## Examples

```python
from qasmsem.symbols import ScopeType, SymbolTable
from qasmsem.types import IsConst, Type, TypeKind

table = SymbolTable()
x_id = table.new_binding("x", Type(TypeKind.BOOL, const=IsConst.FALSE))
assert table.lookup("x").symbol_id == x_id

with table.scope(ScopeType.LOCAL):
    table.new_binding("x", Type(TypeKind.INT, 32))
    assert table.lookup("x").scope_level == 1
assert table.lookup("x").scope_level == 0
```

A new `SymbolTable` starts with the global scope already open. That scope
holds the built-in constants `pi`, `π`, `euler`, `ℇ`, `tau`, `τ` (const
64-bit floats) and the gate `U` (three parameters, one qubit).

```python
from qasmsem.exprs import ArithOp, Cast, FloatLiteral, Identifier, binary_texpr_with_cast
from qasmsem.symbols import SymbolTable
from qasmsem.types import IsConst, Type, TypeKind

table = SymbolTable()
int32 = Type(TypeKind.INT, 32)
n = Identifier("n", table.new_binding("n", int32)).to_texpr(int32)
expr = binary_texpr_with_cast(ArithOp.ADD, n, FloatLiteral("2.5").to_texpr())
assert expr.typ == Type(TypeKind.FLOAT, 64, IsConst.TRUE)
assert isinstance(expr.expression.left.expression, Cast)
```

```python
from qasmsem.context import Context
from qasmsem.semantic_error import SyntaxSpan, TextRange
from qasmsem.symbols import SymbolError

source = "y = 2;\n"
ctx = Context("prog.qasm")
result = ctx.lookup_symbol("y", SyntaxSpan("y", TextRange(0, 1)))
assert result is SymbolError.MISSING_BINDING
print(ctx.semantic_errors.format_errors(source))
```

## What the package does not do

`qasmsem` does not read or parse OpenQASM source text, and it offers no
command-line tool. It does not turn a syntax tree into the ASG: the
expressions, statements and `Program` are built by calling their
constructors, and error locations are `SyntaxSpan`s supplied by the caller.
`include` statements are not resolved; `Include` only records a file path.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```