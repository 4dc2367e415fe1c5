"""Shared data model primitives."""

from curation.data_model.base import StrictBaseModel


__all__ = ["StrictBaseModel"]
