"""Unit tests for the semantic check registry."""

from __future__ import annotations

import pytest


class RecordingCheck:
    """SemanticCheck that records the payloads it sees."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        self.calls: list[object] = []

    def check(self, payload):
        self.calls.append(payload)
        return self.errors


class TestCheckRegistry:
    """Test CheckRegistry registration and dispatch."""

    def test_run_check_without_registration_is_empty(self) -> None:
        from opr_models.schema.semantic import CheckRegistry

        assert tuple(CheckRegistry().run_check("X", {"a": 1})) == ()

    def test_run_check_with_none_id_is_empty(self) -> None:
        from opr_models.schema.semantic import CheckRegistry

        registry = CheckRegistry()
        registry.register_function("X", lambda payload: ["never"])
        assert tuple(registry.run_check(None, {})) == ()

    def test_run_check_returns_output_unmodified(self) -> None:
        """The check's return value is passed through as-is."""
        from opr_models.schema.semantic import CheckRegistry

        output = ["first problem", "second problem"]
        registry = CheckRegistry()
        registry.register_function("X", lambda payload: output)

        assert registry.run_check("X", {}) is output

    def test_reregistration_replaces_previous_check(self) -> None:
        """Only the most recently registered check for an id runs."""
        from opr_models.schema.semantic import CheckRegistry

        first = RecordingCheck(["from first"])
        second = RecordingCheck(["from second"])
        registry = CheckRegistry()
        registry.register_check("X", first)
        registry.register_check("X", second)

        assert registry.run_check("X", {"k": "v"}) == ["from second"]
        assert first.calls == []
        assert second.calls == [{"k": "v"}]

    def test_reregistering_function_replaces_previous(self) -> None:
        from opr_models.schema.semantic import CheckRegistry

        calls: list[str] = []
        registry = CheckRegistry()
        registry.register_function("X", lambda payload: calls.append("first") or [])
        registry.register_function("X", lambda payload: calls.append("second") or ["bad"])

        assert registry.run_check("X", None) == ["bad"]
        assert calls == ["second"]

    def test_check_exceptions_propagate(self) -> None:
        from opr_models.schema.semantic import CheckRegistry

        def broken(payload):
            raise RuntimeError("check exploded")

        registry = CheckRegistry()
        registry.register_function("X", broken)
        with pytest.raises(RuntimeError, match="check exploded"):
            registry.run_check("X", {})

    def test_register_check_rejects_non_check(self) -> None:
        """Objects without a check() method are rejected."""
        from opr_models.schema.semantic import CheckRegistry

        registry = CheckRegistry()
        with pytest.raises(TypeError, match="check"):
            registry.register_check("X", lambda payload: [])  # type: ignore[arg-type]
        assert not registry.has_check("X")

    def test_list_ids_sorted(self) -> None:
        from opr_models.schema.semantic import CheckRegistry

        registry = CheckRegistry()
        registry.register_function("b", lambda payload: [])
        registry.register_function("a", lambda payload: [])

        assert registry.list_ids() == ["a", "b"]
        assert registry.has_check("a")


class TestFunctionCheck:
    """Test FunctionCheck adapter."""

    def test_satisfies_protocol(self) -> None:
        from opr_models.schema.semantic import FunctionCheck, SemanticCheck

        check = FunctionCheck(lambda payload: [str(payload)])
        assert isinstance(check, SemanticCheck)
        assert check.check(3) == ["3"]
