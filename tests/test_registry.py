"""
Tests for the operation registries.
"""

import pytest
from sqlalchemy import Delete, Select, Update
from sqlalchemy.orm import Query

from pgsearch.exceptions import ExtensionUnsupportedError, OperationExistsError
from pgsearch.registry import ClassRegistry, OperationRegistry, default_registry


def shout(self):
    return "shout"


@pytest.fixture
def builder_classes():
    """Two fresh, unrelated builder classes with the methods operations rely on."""

    class Builder:
        def where(self, *criteria):
            return self

        def add_columns(self, *columns):
            return self

    class OtherBuilder:
        def where(self, *criteria):
            return self

        def add_columns(self, *columns):
            return self

    return Builder, OtherBuilder


@pytest.fixture
def filter_only_builder():
    """A builder that can filter but not project, like an UPDATE."""

    class FilterOnlyBuilder:
        def where(self, *criteria):
            return self

    return FilterOnlyBuilder


class TestOperationRegistry:
    def test_incomplete_registry_cannot_be_created(self):
        class Incomplete(OperationRegistry):
            def supports_extension(self):
                return True

        with pytest.raises(TypeError):
            Incomplete()


class TestClassRegistry:
    def test_supports_extension(self, builder_classes):
        assert ClassRegistry(builder_classes).supports_extension()

    def test_no_targets_does_not_support_extension(self):
        assert not ClassRegistry([]).supports_extension()

    def test_non_class_target_does_not_support_extension(self, builder_classes):
        Builder, _ = builder_classes
        assert not ClassRegistry([Builder()]).supports_extension()

    def test_register_adds_method(self, builder_classes):
        Builder, OtherBuilder = builder_classes
        registry = ClassRegistry([Builder])

        registry.register("shout", shout)

        assert registry.has("shout")
        assert Builder().shout() == "shout"
        assert not hasattr(OtherBuilder, "shout")

    def test_register_existing_raises(self, builder_classes):
        registry = ClassRegistry(builder_classes)
        registry.register("shout", shout)

        with pytest.raises(OperationExistsError) as exc_info:
            registry.register("shout", shout)

        assert exc_info.value.code == "exists"
        assert exc_info.value.name == "shout"

    def test_register_unsupported_raises(self):
        registry = ClassRegistry([])

        with pytest.raises(ExtensionUnsupportedError) as exc_info:
            registry.register("shout", shout)

        assert exc_info.value.code == "unsupported"

    def test_register_skips_targets_already_extended(self, builder_classes):
        Builder, OtherBuilder = builder_classes
        ClassRegistry([Builder]).register("shout", shout)

        registry = ClassRegistry([OtherBuilder, Builder])
        assert not registry.has("shout")
        registry.register("shout", shout)

        assert registry.has("shout")
        assert OtherBuilder().shout() == "shout"

    def test_register_only_on_targets_with_required_methods(
        self, builder_classes, filter_only_builder
    ):
        Builder, _ = builder_classes
        registry = ClassRegistry([Builder, filter_only_builder])

        registry.register("shout", shout, requires=("add_columns",))

        assert Builder().shout() == "shout"
        assert not hasattr(filter_only_builder, "shout")
        assert registry.has("shout", requires=("add_columns",))
        assert not registry.has("shout", requires=("where",))

    def test_register_on_all_targets_providing_requirement(
        self, builder_classes, filter_only_builder
    ):
        Builder, _ = builder_classes
        registry = ClassRegistry([Builder, filter_only_builder])

        registry.register("shout", shout, requires=("where",))

        assert Builder().shout() == "shout"
        assert filter_only_builder().shout() == "shout"

    def test_register_without_capable_target_raises(self, filter_only_builder):
        registry = ClassRegistry([filter_only_builder])

        with pytest.raises(ExtensionUnsupportedError):
            registry.register("shout", shout, requires=("add_columns",))

        assert not hasattr(filter_only_builder, "shout")

    def test_failed_register_rolls_back(self, builder_classes):
        Builder, _ = builder_classes

        class Frozen(type):
            def __setattr__(cls, name, value):
                raise TypeError(f"can't set attribute {name!r}")

        class FrozenBuilder(metaclass=Frozen):
            def where(self, *criteria):
                return self

        registry = ClassRegistry([Builder, FrozenBuilder])

        with pytest.raises(TypeError):
            registry.register("shout", shout, requires=("where",))

        assert not hasattr(Builder, "shout")
        assert not hasattr(FrozenBuilder, "shout")

    def test_unregister(self, builder_classes):
        Builder, OtherBuilder = builder_classes
        registry = ClassRegistry([Builder, OtherBuilder])
        registry.register("shout", shout)

        registry.unregister("shout")

        assert not hasattr(Builder, "shout")
        assert not hasattr(OtherBuilder, "shout")

    def test_unregister_leaves_foreign_methods(self, builder_classes):
        Builder, _ = builder_classes
        Builder.shout = shout

        ClassRegistry([Builder]).unregister("shout")

        assert Builder().shout() == "shout"


class TestDefaultRegistry:
    def test_targets_sqlalchemy_builders(self):
        registry = default_registry()
        assert registry.targets == [Select, Update, Delete, Query]
        assert registry.supports_extension()

    def test_is_shared(self):
        assert default_registry() is default_registry()
