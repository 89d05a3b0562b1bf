"""Tests for the interactive rules: reactions and newbie comments."""

import datetime

import pytest

from yaga.rules.reactions import PostReactions, ReactionCount, parse_thresholds
from yaga.rules.social import HasMentioned, NewbieComment


class TestReactionCount:
    def test_selected_reactions(self, make_event, make_member):
        member = make_member(reactions_received={"Like": 6, "Awesome": 4, "Dislike": 20})
        criteria = {"Target": 10, "ReactionNames": ["Like", "Awesome"]}
        assert ReactionCount().award(make_event(user=member), criteria) is True

    def test_below_target(self, make_event, make_member):
        member = make_member(reactions_received={"Like": 6, "Dislike": 20})
        criteria = {"Target": 10, "ReactionNames": ["Like"]}
        assert ReactionCount().award(make_event(user=member), criteria) is False

    def test_all_reactions_when_none_selected(self, make_event, make_member):
        member = make_member(reactions_received={"Like": 6, "Dislike": 4})
        assert ReactionCount().award(make_event(user=member), {"Target": 10}) is True

    def test_interacts(self):
        assert ReactionCount().interacts() is True


class TestPostReactions:
    def test_all_thresholds_met(self, make_event):
        event = make_event(post_reactions={"Like": 5, "Awesome": 3})
        criteria = {"Thresholds": {"Like": 5, "Awesome": "2"}}
        assert PostReactions().award(event, criteria) is True

    def test_one_threshold_missed(self, make_event):
        event = make_event(post_reactions={"Like": 5})
        criteria = {"Thresholds": {"Like": 5, "Awesome": 1}}
        assert PostReactions().award(event, criteria) is False

    def test_empty_thresholds_ignored(self, make_event):
        event = make_event(post_reactions={"Like": 1})
        assert PostReactions().award(event, {"Thresholds": {"Like": "", "Awesome": 0}}) is False

    def test_form_text_value(self, make_event):
        field = PostReactions().form().fields[0]
        event = make_event(post_reactions={"Like": 5, "Awesome": 3})

        assert PostReactions().award(event, {field.name: field.default}) is True
        assert PostReactions().award(event, {field.name: "Like=5, Awesome=2"}) is True
        assert PostReactions().award(event, {field.name: "Like=5,Awesome=4"}) is False

    def test_blank_text_value(self, make_event):
        event = make_event(post_reactions={"Like": 1})
        assert PostReactions().award(event, {"Thresholds": ""}) is False

    def test_interacts(self):
        assert PostReactions().interacts() is True


class TestParseThresholds:
    def test_text(self):
        assert parse_thresholds(" Like = 3 , Awesome=1,") == {"Like": 3, "Awesome": 1}

    def test_zero_dropped(self):
        assert parse_thresholds("Like=0, Awesome=2") == {"Awesome": 2}

    def test_mapping(self):
        assert parse_thresholds({"Like": "4", "Dislike": ""}) == {"Like": 4}

    def test_missing_count_rejected(self):
        with pytest.raises(ValueError):
            parse_thresholds("Like")


class TestHasMentioned:
    def test_mentions_someone(self, make_event):
        assert HasMentioned().award(make_event(mentions=["bob"]), {}) is True

    def test_self_mention_only(self, make_event):
        assert HasMentioned().award(make_event(mentions=["alice"]), {}) is False

    def test_not_interactive(self):
        assert HasMentioned().interacts() is False


class TestNewbieComment:
    def test_comment_on_newbie(self, make_event, make_member, now):
        newbie = make_member(
            user_id=2, name="newbie", date_inserted=now - datetime.timedelta(days=2), count_discussions=1
        )
        event = make_event(counterpart=newbie)
        assert NewbieComment().award(event, {"Duration": 1, "Period": "week"}) is True

    def test_veteran_author(self, make_event, make_member, now):
        veteran = make_member(user_id=2, date_inserted=now - datetime.timedelta(days=60))
        event = make_event(counterpart=veteran)
        assert NewbieComment().award(event, {"Duration": 1, "Period": "week"}) is False

    def test_own_discussion(self, make_event, make_member, now):
        me = make_member(date_inserted=now - datetime.timedelta(days=1))
        event = make_event(user=me, counterpart=me)
        assert NewbieComment().award(event, {"Duration": 1, "Period": "week"}) is False

    def test_no_counterpart(self, make_event):
        assert NewbieComment().award(make_event(), {"Duration": 1, "Period": "day"}) is False

    def test_interacts(self):
        assert NewbieComment().interacts() is True
