"""
Direct interpretation of the syntax tree.

`evaluate` dispatches on the type of node through a table built, at the bottom
of this module, from the `_eval_*` functions and their annotations.

Nothing in here raises for a misbehaving program. Trouble becomes an Error
value, and every place that evaluates a sub-part (blocks, the program,
operands, argument lists, array and hash literals) stops at the first Error
and hands it straight back. A `slay` travels the same way inside a
ReturnSignal until the enclosing function call unwraps it.
"""
from typing import Union, Sequence
from . import syntax
from .environment import Environment
from .runtime import (
	BrainrotObject, Integer, String, Array, Hash, HashPair, Hashable,
	Function, Builtin, Error, ReturnSignal,
	NULL, native_bool, is_truthy, new_error, is_error,
)

def evaluate(node:syntax.Node, env:Environment) -> BrainrotObject:
	assert isinstance(env, Environment), env
	try: fn = EVALUATE[type(node)]
	except KeyError: raise NotImplementedError(type(node), node)
	return fn(node, env)

def _is_abrupt(it) -> bool:
	""" An Error or a `slay` on its way out: either one ends whatever is being evaluated. """
	return isinstance(it, (Error, ReturnSignal))

def _eval_program(node:syntax.Program, env:Environment):
	result = NULL
	for stmt in node.statements:
		result = evaluate(stmt, env)
		if isinstance(result, ReturnSignal): return result.value
		if is_error(result): return result
	return result

def _eval_block(node:syntax.Block, env:Environment):
	# Unlike the program, a block passes the ReturnSignal along still wrapped.
	result = NULL
	for stmt in node.statements:
		result = evaluate(stmt, env)
		if _is_abrupt(result): return result
	return result

def _eval_expression_statement(node:syntax.ExpressionStatement, env:Environment):
	return evaluate(node.expression, env)

def _eval_binding(node:syntax.Binding, env:Environment):
	value = evaluate(node.value, env)
	if _is_abrupt(value): return value
	env.bind(node.name.name, value)
	return NULL

def _eval_return(node:syntax.Return, env:Environment):
	if node.value is None: return ReturnSignal(NULL)
	value = evaluate(node.value, env)
	if _is_abrupt(value): return value
	return ReturnSignal(value)

###############################################################################

def _eval_integer(node:syntax.IntegerLiteral, env:Environment): return Integer(node.value)
def _eval_boolean(node:syntax.BooleanLiteral, env:Environment): return native_bool(node.value)
def _eval_string(node:syntax.StringLiteral, env:Environment): return String(node.value)

def _eval_identifier(node:syntax.Identifier, env:Environment):
	found = env.resolve(node.name)
	if found is None: return new_error("bruh moment! identifier not found: %s", node.name)
	return found

def _eval_prefix(node:syntax.PrefixExpression, env:Environment):
	operand = evaluate(node.operand, env)
	if _is_abrupt(operand): return operand
	if node.operator == "!": return native_bool(not is_truthy(operand))
	if node.operator == "-" and isinstance(operand, Integer): return Integer(-operand.value)
	return new_error("we don't do that here. unknown operator: %s%s", node.operator, operand.kind)

def _eval_infix(node:syntax.InfixExpression, env:Environment):
	lhs = evaluate(node.lhs, env)
	if _is_abrupt(lhs): return lhs
	rhs = evaluate(node.rhs, env)
	if _is_abrupt(rhs): return rhs
	return infix_operation(node.operator, lhs, rhs)

def _truncated_quotient(a:int, b:int) -> int:
	q = abs(a) // abs(b)
	return q if (a < 0) == (b < 0) else -q

INTEGER_ARITHMETIC = {
	"+": lambda a, b: Integer(a + b),
	"-": lambda a, b: Integer(a - b),
	"*": lambda a, b: Integer(a * b),
	"/": lambda a, b: Integer(_truncated_quotient(a, b)),
	"<": lambda a, b: native_bool(a < b),
	">": lambda a, b: native_bool(a > b),
	"==": lambda a, b: native_bool(a == b),
	"!=": lambda a, b: native_bool(a != b),
}

def infix_operation(op:str, lhs:BrainrotObject, rhs:BrainrotObject) -> BrainrotObject:
	if lhs.kind != rhs.kind:
		return new_error("L + ratio + type mismatch: %s %s %s", lhs.kind, op, rhs.kind)
	if isinstance(lhs, Integer) and op in INTEGER_ARITHMETIC:
		if op == "/" and rhs.value == 0:
			return new_error("division by zero: %d / %d", lhs.value, rhs.value)
		return INTEGER_ARITHMETIC[op](lhs.value, rhs.value)
	if isinstance(lhs, String):
		# Strings have no other operators, not even comparison.
		if op == "+": return String(lhs.value + rhs.value)
	elif op == "==":
		return native_bool(lhs is rhs)
	elif op == "!=":
		return native_bool(lhs is not rhs)
	return new_error("we don't do that here. unknown operator: %s %s %s", lhs.kind, op, rhs.kind)

def _eval_if(node:syntax.IfExpression, env:Environment):
	condition = evaluate(node.condition, env)
	if _is_abrupt(condition): return condition
	if is_truthy(condition): return evaluate(node.consequence, env)
	if node.alternative is not None: return evaluate(node.alternative, env)
	return NULL

###############################################################################

def _eval_function(node:syntax.FunctionLiteral, env:Environment):
	# By reference: later bindings in this scope are visible to the closure.
	return Function(node.params, node.body, env)

def _eval_call(node:syntax.CallExpression, env:Environment):
	callee = evaluate(node.callee, env)
	if _is_abrupt(callee): return callee
	args = _evaluate_each(node.args, env)
	if _is_abrupt(args): return args
	return apply(callee, args)

def apply(callee:BrainrotObject, args:Sequence[BrainrotObject]) -> BrainrotObject:
	if isinstance(callee, Function):
		if len(args) != len(callee.params):
			return new_error("wrong number of arguments. got=%d, want=%d", len(args), len(callee.params))
		# The new scope hangs off the closure's own scope, not the caller's.
		inner = callee.env.enclosed()
		for param, arg in zip(callee.params, args):
			inner.bind(param.name, arg)
		result = evaluate(callee.body, inner)
		return result.value if isinstance(result, ReturnSignal) else result
	if isinstance(callee, Builtin):
		return callee.fn(*args)
	return new_error("not a function: %s", callee.kind)

def _evaluate_each(nodes:Sequence[syntax.Expression], env:Environment) -> Union[list[BrainrotObject], Error, ReturnSignal]:
	""" Left to right, giving up at the first Error or `slay`. """
	results = []
	for n in nodes:
		it = evaluate(n, env)
		if _is_abrupt(it): return it
		results.append(it)
	return results

def _eval_array(node:syntax.ArrayLiteral, env:Environment):
	elements = _evaluate_each(node.elements, env)
	if _is_abrupt(elements): return elements
	return Array(elements)

def _unusable_key(key:BrainrotObject) -> Error:
	return new_error("nah fam %s cannot be used as a hash key", key.kind)

def _eval_hash(node:syntax.HashLiteral, env:Environment):
	pairs = {}
	for key_node, value_node in node.pairs:
		key = evaluate(key_node, env)
		if _is_abrupt(key): return key
		if not isinstance(key, Hashable): return _unusable_key(key)
		value = evaluate(value_node, env)
		if _is_abrupt(value): return value
		pairs[key.hash_key()] = HashPair(key, value)
	return Hash(pairs)

def _eval_index(node:syntax.IndexExpression, env:Environment):
	collection = evaluate(node.collection, env)
	if _is_abrupt(collection): return collection
	index = evaluate(node.index, env)
	if _is_abrupt(index): return index
	return index_operation(collection, index)

def index_operation(collection:BrainrotObject, index:BrainrotObject) -> BrainrotObject:
	if isinstance(collection, Array) and isinstance(index, Integer):
		if 0 <= index.value < len(collection.elements):
			return collection.elements[index.value]
		return NULL
	if isinstance(collection, Hash):
		if not isinstance(index, Hashable): return _unusable_key(index)
		pair = collection.pairs.get(index.hash_key())
		return NULL if pair is None else pair.value
	return new_error("index operator not supported: %s", collection.kind)

###############################################################################

EVALUATE = {}
for _k, _v in list(globals().items()):
	if _k.startswith("_eval_"):
		_t = _v.__annotations__["node"]
		assert isinstance(_t, type), (_k, _t)
		EVALUATE[_t] = _v
