"""Tests for warbler.__init__ — lazy import registry covers all public names."""

import pytest

import warbler


@pytest.mark.parametrize("name", warbler.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(warbler, name)
    assert obj is not None, f"warbler.{name} resolved to None"


def test_define_is_the_page_decorator() -> None:
    from warbler.pages.define import define

    assert warbler.define is define


def test_unknown_name_raises_attribute_error() -> None:
    """Accessing an unregistered name raises AttributeError."""
    with pytest.raises(AttributeError, match="no attribute"):
        warbler.__getattr__("ThisDoesNotExist")
