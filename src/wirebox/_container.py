from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar, get_origin, overload


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    T = TypeVar("T")

    Token = type[T] | str
    Resolver = Callable[[Token[Any]], Any]


class Lifetime(Enum):
    PERMANENT = "permanent"
    TRANSIENT = "transient"


@dataclass
class Registration:
    factory: Callable[..., object] | None
    lifetime: Lifetime
    args: tuple[Any, ...] = field(default_factory=tuple)


class ResolutionError(RuntimeError):
    """Raised when a token has no registration or no built instance."""

    def __init__(self, token: object) -> None:
        self.token = token
        self.name = _token_name(token)
        super().__init__(f"Cannot resolve type {self.name}.")


class UnknownLifetimeError(ValueError):
    pass


class Container:
    """Minimal DI container.

    - register factories under type or string tokens
    - permanent registrations are built eagerly, at registration time
    - transient registrations are built on every resolve
    - pre-built values via `register_value`.

    Factories receive only their positional `args`. To depend on other
    tokens they call a resolver obtained from `get_resolver()`, so a
    dependency has to be registered before anything that needs it.
    """

    def __init__(self) -> None:
        self._registrations: dict[Any, Registration] = {}
        self._instances: dict[Any, object] = {}
        # re-entrant: permanent factories resolve while register holds it
        self._lock = threading.RLock()

    @overload
    def register(
        self,
        token: type[T],
        factory: Callable[..., T],
        lifetime: Lifetime | str,
        args: Sequence[Any] | None = ...,
    ) -> None: ...

    @overload
    def register(
        self,
        token: str,
        factory: Callable[..., Any],
        lifetime: Lifetime | str,
        args: Sequence[Any] | None = ...,
    ) -> None: ...

    def register(
        self,
        token: Token[T],
        factory: Callable[..., Any],
        lifetime: Lifetime | str,
        args: Sequence[Any] | None = None,
    ) -> None:
        """Register a factory for a token.

        Example:
          container.register(IFoo, FooImpl, Lifetime.PERMANENT)
          container.register("db", create_db, "transient", ["sqlite://"])

        Permanent registrations call ``factory(*args)`` right away. Whatever
        the factory raises (including a `ResolutionError` for a dependency
        that is not registered yet) propagates out of this call.
        """
        if not callable(factory):
            msg = f"Factory for {_token_name(token)} must be callable, got {type(factory).__name__}"
            raise TypeError(msg)

        lifetime = _coerce_lifetime(lifetime)
        reg = Registration(factory=factory, lifetime=lifetime, args=tuple(args or ()))

        with self._lock:
            if token in self._registrations:
                logger.debug("Replacing registration for %s", _token_name(token))
            self._registrations[token] = reg
            logger.debug("Registered %s (%s)", _token_name(token), lifetime.value)

            if lifetime is Lifetime.TRANSIENT:
                self._instances.pop(token, None)
                return

            # factories run under the lock; one that resolves from another thread deadlocks
            try:
                instance = self._build(token, reg)
            except Exception:
                logger.warning("Eager construction of %s failed", _token_name(token))
                raise
            # a failed rebuild leaves the previous instance in place
            self._instances[token] = instance
            logger.debug("Built permanent instance of %s", _token_name(token))

    def register_value(self, token: Token[T], value: object) -> None:
        """Register a pre-built value (always permanent)."""
        with self._lock:
            self._registrations[token] = Registration(factory=None, lifetime=Lifetime.PERMANENT)
            self._instances[token] = value
            logger.debug("Registered value for %s", _token_name(token))

    @overload
    def resolve(self, token: type[T]) -> T: ...

    @overload
    def resolve(self, token: str) -> Any: ...

    def resolve(self, token: Token[T]) -> object:
        """Resolve the token to an instance.

        - transient: build a fresh instance from the stored factory and args.
        - permanent: return the instance built at registration time.
        """
        with self._lock:
            reg = self._registrations.get(token)
            if reg is None:
                raise ResolutionError(token)

            if reg.lifetime is Lifetime.PERMANENT:
                if token not in self._instances:
                    raise ResolutionError(token)
                return self._instances[token]

            if reg.lifetime is not Lifetime.TRANSIENT:
                msg = f"Unknown lifetime {reg.lifetime!r} for {_token_name(token)}"
                raise UnknownLifetimeError(msg)

        # transient factories run outside the lock
        return self._build(token, reg)

    def get_resolver(self) -> Resolver:
        """Return `resolve` bound to this container, for use inside factories."""
        return self.resolve

    def _build(self, token: object, reg: Registration) -> object:
        if reg.factory is None:
            raise ResolutionError(token)
        return reg.factory(*reg.args)


def _coerce_lifetime(lifetime: Lifetime | str) -> Lifetime:
    if isinstance(lifetime, Lifetime):
        return lifetime
    try:
        return Lifetime(lifetime)
    except ValueError as e:
        msg = f"Unknown lifetime {lifetime!r}; expected one of {[m.value for m in Lifetime]}"
        raise UnknownLifetimeError(msg) from e


def _token_name(token: object) -> str:
    """Human-readable token name used in error and log messages.

    Strings are used as-is and classes by ``__name__``. Parameterised
    generics keep their arguments (``list[int]``), everything else falls
    back to ``__name__`` or ``repr``.
    """
    if isinstance(token, str):
        return token
    if get_origin(token) is not None:
        return repr(token)
    if isinstance(token, type):
        return token.__name__
    return getattr(token, "__name__", None) or repr(token)
