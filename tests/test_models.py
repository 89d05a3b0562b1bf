"""Tests for Yaga domain models."""

import datetime

import pytest
from pydantic import ValidationError

from yaga.models import (
    ContentRecord,
    CriteriaForm,
    FieldType,
    FormField,
    Member,
    RuleDescriptor,
)


class TestMember:
    def test_post_count(self, make_member):
        member = make_member(count_comments=4, count_discussions=2)
        assert member.count_posts == 6

    def test_negative_counts_rejected(self, now):
        with pytest.raises(ValidationError):
            Member(user_id=1, name="x", date_inserted=now, count_comments=-1)


class TestRuleDescriptor:
    def test_frozen(self):
        descriptor = RuleDescriptor(
            identity="PostCount",
            name="Post Count",
            description="",
            interactive=False,
            form=CriteriaForm(),
        )
        with pytest.raises(ValidationError):
            descriptor.name = "Changed"


class TestFormField:
    def test_defaults(self):
        field = FormField(name="Target", label="Count")
        assert field.type == FieldType.TEXT
        assert field.options == {}
        assert field.default is None

    def test_type_from_string(self):
        assert FormField(name="a", label="b", type="select").type == FieldType.SELECT


class TestContentRecord:
    def test_aliases(self):
        record = ContentRecord(
            ItemType="Discussion",
            ContentID=3,
            Name="Hi",
            ContentURL="/d/3",
            DateInserted="2024-01-01T00:00:00Z",
        )
        assert record.item_type == "discussion"
        assert record.content_id == 3
        assert record.date_inserted == datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc)
        assert record.format == "Text"

    def test_populate_by_name(self):
        record = ContentRecord(
            item_type="comment",
            content_id=1,
            name="x",
            content_url="/c/1",
            date_inserted="2024-01-01T00:00:00Z",
        )
        assert record.item_type == "comment"

    def test_missing_required(self):
        with pytest.raises(ValidationError):
            ContentRecord(ItemType="Comment")
