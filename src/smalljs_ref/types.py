from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, TextIO, Tuple, Union
from typing_extensions import TypeAlias, TypeGuard

# ---------- Value Model ----------

@dataclass(frozen=True)
class JSUndefined:
    def __repr__(self) -> str:
        return "undefined"

UNDEFINED = JSUndefined()

class _NotFound:
    """Marker returned by `JSObject.lookup` when no scope binds the name."""

    _instance: Optional['_NotFound'] = None

    def __new__(cls) -> '_NotFound':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<not found>"

NOT_FOUND = _NotFound()

Invoker = Callable[['JSValue', List['JSValue']], 'JSValue']

class JSObject:
    """Property bag with an optional prototype and an optional invocation behavior.

    Plain objects, functions and scope environments all share this class; an
    environment is an object whose prototype is the enclosing environment.
    """

    def __init__(self, proto: Optional['JSObject']=None, name: str="object", invoker: Optional[Invoker]=None, kind: str="object"):
        self.proto = proto
        self.name = name
        self.invoker = invoker
        self.kind = kind
        self.slots: Dict[str, JSValue] = {}

    @classmethod
    def new_object(cls, proto: Optional['JSObject']=None) -> 'JSObject':
        return cls(proto=proto)

    @classmethod
    def new_env(cls, parent: Optional['JSObject']=None) -> 'JSObject':
        return cls(proto=parent, name="env", kind="env")

    @classmethod
    def new_function(cls, name: str, invoker: Invoker) -> 'JSObject':
        return cls(proto=None, name=name, invoker=invoker, kind="function")

    def register(self, name: str, value: 'JSValue') -> None:
        self.slots[name] = value

    def lookup(self, name: str) -> Union['JSValue', _NotFound]:
        cur: Optional[JSObject] = self

        while cur is not None:
            if name in cur.slots:
                return cur.slots[name]
            cur = cur.proto

        return NOT_FOUND

    def lookup_or_undefined(self, name: str) -> 'JSValue':
        value = self.lookup(name)
        if value is NOT_FOUND:
            return UNDEFINED
        return value

    def is_callable(self) -> bool:
        return self.invoker is not None

    def invoke(self, receiver: 'JSValue', args: List['JSValue']) -> 'JSValue':
        if self.invoker is None:
            raise JSTypeError(f"{self} is not a function")

        return self.invoker(receiver, args)

    def __repr__(self) -> str:
        return self.render(set())

    def render(self, seen: set[int]) -> str:
        if self.kind == "function":
            return f"function {self.name}"

        if self.kind == "env":
            return "[env]"

        if id(self) in seen:
            return "{...}"

        seen.add(id(self))
        pairs = []

        for k, v in self.slots.items():
            if isinstance(v, JSObject):
                rendered = v.render(seen)
            elif isinstance(v, str):
                rendered = f'"{v}"'
            else:
                rendered = repr(v)
            pairs.append(f"{k}: {rendered}")

        seen.discard(id(self))

        return "{" + ", ".join(pairs) + "}"

JSValue: TypeAlias = Union[JSUndefined, int, str, JSObject]

def is_js_object(value: object) -> TypeGuard[JSObject]:
    return isinstance(value, JSObject)

def is_js_int(value: object) -> TypeGuard[int]:
    # bool is an int subclass in Python but never a smalljs value
    return isinstance(value, int) and not isinstance(value, bool)

# ---------- Completion ----------

@dataclass(frozen=True)
class ReturnSignal:
    """Completion record produced by `return`.

    It is an ordinary evaluation result, not an exception: blocks and ifs hand
    it upward unchanged and the nearest function invocation unwraps it.
    """
    value: JSValue

Completion: TypeAlias = Union[JSValue, ReturnSignal]

def is_return(value: object) -> TypeGuard[ReturnSignal]:
    return isinstance(value, ReturnSignal)

# ---------- Exceptions ----------

class JSRuntimeError(Exception):
    line: Optional[int]

    def __init__(self, message: str, line: Optional[int]=None):
        super().__init__(message)
        self.message = message
        self.line = line

    def __str__(self) -> str:  # pragma: no cover - trivial formatting
        if self.line is None:
            return self.message

        return f"{self.message} (line {self.line})"

class JSTypeError(JSRuntimeError):
    pass

class JSUndefinedVariableError(JSRuntimeError):
    def __init__(self, name: str, line: Optional[int]=None):
        super().__init__(f"undefined variable {name}", line)
        self.name = name

class JSArityError(JSRuntimeError):
    pass

class JSArithmeticError(JSRuntimeError):
    pass

# ---------- Builtins registry ----------

StdlibFn = Callable[['StdlibContext', List[JSValue]], JSValue]

@dataclass(frozen=True)
class StdlibFunction:
    fn: StdlibFn
    arity: Optional[int] = None

class StdlibContext:
    """What a builtin may touch while running: the output sink."""

    def __init__(self, out: TextIO):
        self.out = out

class Builtins:
    stdlib_functions: Dict[str, StdlibFunction] = {}

def builtin_names() -> Tuple[str, ...]:
    return tuple(Builtins.stdlib_functions)
