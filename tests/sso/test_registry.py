"""Tests for the SSO method registry."""

from unittest.mock import Mock

from structlog.testing import capture_logs

from forge_sso.sso.registry import MethodRegistry


def _lifecycle_method(name: str, fail: bool = False) -> Mock:
    method = Mock()
    method.name = name
    if fail:
        method.init.side_effect = RuntimeError(f"{name} broken")
        method.free.side_effect = RuntimeError(f"{name} broken")
    return method


class TestMethodRegistry:
    """Test registration and ordering."""

    def test_methods_preserve_insertion_order(self) -> None:
        first, second = _lifecycle_method("first"), _lifecycle_method("second")
        registry = MethodRegistry([first, second])
        third = _lifecycle_method("third")

        registry.register(third)

        assert registry.methods() == (first, second, third)
        assert len(registry.methods()) == 3

    def test_methods_returns_snapshot(self) -> None:
        registry = MethodRegistry([_lifecycle_method("first")])
        snapshot = registry.methods()

        registry.register(_lifecycle_method("second"))

        assert len(snapshot) == 1
        assert len(registry.methods()) == 2

    def test_register_does_not_init(self) -> None:
        registry = MethodRegistry()
        registry.init()
        late = _lifecycle_method("late")

        registry.register(late)

        late.init.assert_not_called()
        assert registry.methods() == (late,)


class TestLifecycle:
    """Test init and free keep going past failures."""

    def test_init_continues_after_failure(self) -> None:
        broken = _lifecycle_method("broken", fail=True)
        healthy = _lifecycle_method("healthy")
        registry = MethodRegistry([broken, healthy])

        with capture_logs() as logs:
            registry.init()

        broken.init.assert_called_once()
        healthy.init.assert_called_once()
        errors = [log for log in logs if log["log_level"] == "error"]
        assert len(errors) == 1
        assert errors[0]["method"] == "broken"
        assert errors[0]["error"] == "broken broken"

    def test_free_continues_after_failure(self) -> None:
        broken = _lifecycle_method("broken", fail=True)
        counter = {"freed": 0}
        healthy = _lifecycle_method("healthy")
        healthy.free.side_effect = lambda: counter.update(freed=counter["freed"] + 1)
        registry = MethodRegistry([broken, healthy])

        with capture_logs() as logs:
            registry.free()

        assert counter["freed"] == 1
        assert [log["method"] for log in logs if log["log_level"] == "error"] == [
            "broken"
        ]

    def test_init_calls_methods_in_order(self) -> None:
        calls: list[str] = []
        methods = []
        for name in ("oauth2", "basic", "session"):
            method = _lifecycle_method(name)
            method.init.side_effect = lambda name=name: calls.append(name)
            methods.append(method)

        MethodRegistry(methods).init()

        assert calls == ["oauth2", "basic", "session"]
