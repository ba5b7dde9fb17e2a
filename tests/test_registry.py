"""Tests for Registry, ModuleRecord and the implementation variants."""

import unittest

from modulum.exceptions import RegistrationError
from modulum.implementation import Factory, Value
from modulum.record import ModuleRecord
from modulum.registry import Registry


class TestImplementations(unittest.TestCase):
    def test_value_is_returned_as_is_even_if_callable(self) -> None:
        fn = lambda: "called"  # noqa: E731
        self.assertIs(Value(fn).produce([]), fn)

    def test_factory_receives_dependencies_positionally(self) -> None:
        self.assertEqual(Factory(lambda a, b: (a, b)).produce([1, 2]), (1, 2))

    def test_factory_rejects_non_callable(self) -> None:
        with self.assertRaises(RegistrationError):
            Factory(42)  # type: ignore[arg-type]


class TestModuleRecord(unittest.TestCase):
    def test_new_record_is_unresolved_without_instance(self) -> None:
        record = ModuleRecord("svc", ("a",), Factory(lambda a: a))
        self.assertFalse(record.is_resolved)
        self.assertFalse(record.has_instance)
        self.assertIsNone(record.instance)

    def test_record_without_dependencies_is_resolved(self) -> None:
        self.assertTrue(ModuleRecord("svc", (), Value(1)).is_resolved)

    def test_materialize_uses_declared_order(self) -> None:
        record = ModuleRecord("svc", ("b", "a"), Factory(lambda b, a: b + a))
        record.resolved["a"] = "A"
        record.resolved["b"] = "B"
        self.assertEqual(record.materialize(), "BA")
        self.assertEqual(record.instance, "BA")

    def test_falsy_instance_counts_as_materialized(self) -> None:
        record = ModuleRecord("zero", (), Value(0))
        record.materialize()
        self.assertTrue(record.has_instance)
        self.assertEqual(record.instance, 0)

    def test_materialize_twice_is_refused(self) -> None:
        record = ModuleRecord("svc", (), Factory(object))
        record.materialize()
        with self.assertRaises(RuntimeError):
            record.materialize()


class TestRegistryDefine(unittest.TestCase):
    def setUp(self) -> None:
        self.registry = Registry()

    def test_define_normalizes_key_and_dependencies(self) -> None:
        record = self.registry.define("Svc.Mail", Factory(lambda c: c), ["Core\\Config"])
        assert record is not None
        self.assertEqual(record.key, "svc/mail")
        self.assertEqual(record.dependencies, ("core/config",))
        self.assertTrue(self.registry.contains("SVC/MAIL"))

    def test_single_string_dependency(self) -> None:
        record = self.registry.define("svc", Factory(lambda c: c), "config")
        assert record is not None
        self.assertEqual(record.dependencies, ("config",))

    def test_duplicate_without_force_keeps_original(self) -> None:
        first = self.registry.define("x", Value({"a": 1}))
        self.assertIsNone(self.registry.define("X", Value({"a": 2})))
        self.assertIs(self.registry.get("x"), first)

    def test_force_replaces_record(self) -> None:
        first = self.registry.define("x", Value(1))
        second = self.registry.define("x", Value(2), force=True)
        self.assertIsNot(first, second)
        self.assertIs(self.registry.get("x"), second)
        self.assertEqual(len(self.registry), 1)

    def test_empty_key_raises(self) -> None:
        with self.assertRaises(RegistrationError):
            self.registry.define("", Value(1))

    def test_raw_implementation_raises(self) -> None:
        with self.assertRaises(RegistrationError) as ctx:
            self.registry.define("x", {"a": 1})  # type: ignore[arg-type]
        self.assertIn("Value or Factory", str(ctx.exception))

    def test_dependencies_with_value_raise(self) -> None:
        with self.assertRaises(RegistrationError):
            self.registry.define("x", Value(1), ["a"])

    def test_duplicate_dependencies_raise(self) -> None:
        with self.assertRaises(RegistrationError) as ctx:
            self.registry.define("x", Factory(lambda a, b: a), ["a", "A"])
        self.assertIn("Duplicate dependencies: a", str(ctx.exception))
        self.assertFalse(self.registry.contains("x"))

    def test_empty_dependency_key_raises(self) -> None:
        with self.assertRaises(RegistrationError):
            self.registry.define("x", Factory(lambda a: a), [""])


class TestRegistryQueries(unittest.TestCase):
    def setUp(self) -> None:
        self.registry = Registry()
        for key in ("db", "db/pool", "db/pool/size", "dbx", "log", "app/db"):
            self.registry.define(key, Value(key))

    def test_namespace(self) -> None:
        self.assertEqual(sorted(self.registry.namespace("DB")), ["db", "db/pool", "db/pool/size"])

    def test_empty_namespace_lists_top_level(self) -> None:
        self.assertEqual(sorted(self.registry.namespace()), ["db", "dbx", "log"])

    def test_modules_is_read_only(self) -> None:
        modules = self.registry.modules()
        self.assertIn("log", modules)
        with self.assertRaises(TypeError):
            modules["new"] = None  # type: ignore[index]

    def test_clear(self) -> None:
        self.registry.clear()
        self.assertEqual(len(self.registry), 0)
        self.assertFalse(self.registry.contains("db"))


if __name__ == "__main__":
    unittest.main()
