"""列配置归一化单元测试。

测试覆盖：
- 标签、语言的单列与全局并集
- 空列表归一化为 None（不限制），而不是空集合
- 分类名屏蔽列表与分类ID列表的不对称
- 视频类型取反
- 排序 / 时间范围键校验
- 失效判断
"""

import pytest
from pydantic import ValidationError

from deckfilter.modules.columns.application.normalize import normalize, should_invalidate
from deckfilter.modules.columns.domain.entities import (
    ColumnConfig,
    ColumnSettings,
    GlobalSettings,
)
from deckfilter.modules.items.domain.entities import ContentKind


class TestNormalize:
    """normalize 测试。"""

    def test_no_settings_means_no_restrictions(self):
        """测试无设置时不做任何限制。"""
        config = normalize(ContentKind.LIVE, None, None)

        assert config == ColumnConfig(kind=ContentKind.LIVE)
        assert config.uses_tag_filter is False
        assert config.can_run is True

    def test_tag_union_with_global(self):
        """测试标签并集与去重。"""
        config = normalize(
            ContentKind.LIVE,
            ColumnSettings(tags=["a", "b"], blocked_tags=["x"]),
            GlobalSettings(tags=["b", "c"], blocked_tags=["y", "x"]),
        )

        assert config.required_tag_ids == frozenset({"a", "b", "c"})
        assert config.blocked_tag_ids == frozenset({"x", "y"})
        assert config.uses_tag_filter is True

    def test_tags_are_case_sensitive(self):
        """测试标签区分大小写。"""
        config = normalize(ContentKind.LIVE, ColumnSettings(tags=["Abc", "abc"]), None)

        assert config.required_tag_ids == frozenset({"Abc", "abc"})

    def test_languages_uppercased_union(self):
        """测试语言大写并集。"""
        config = normalize(
            ContentKind.VIDEO,
            ColumnSettings(lang=["en", "De"]),
            GlobalSettings(lang=["EN", "fr"]),
        )

        assert config.languages == frozenset({"EN", "DE", "FR"})

    @pytest.mark.parametrize(
        "field",
        ["tags", "blocked_tags", "filter_games", "filter_blocked_games", "lang"],
    )
    def test_empty_list_normalizes_to_none(self, field):
        """测试空列表表示不限制。"""
        config = normalize(ContentKind.LIVE, ColumnSettings(**{field: []}), None)

        assert config == ColumnConfig(kind=ContentKind.LIVE)

    def test_empty_global_lists_normalize_to_none(self):
        """测试全局空列表。"""
        config = normalize(
            ContentKind.CLIP,
            None,
            GlobalSettings(tags=[], blocked_tags=[], lang=[], blocked_games=[]),
        )

        assert config.required_tag_ids is None
        assert config.blocked_tag_ids is None
        assert config.languages is None
        assert config.blocked_category_names is None

    def test_category_lists_are_column_only(self):
        """测试分类ID列表只取单列设置，全局按名称屏蔽。"""
        config = normalize(
            ContentKind.CLIP,
            ColumnSettings(filter_games=["10", "20"], filter_blocked_games=["30"]),
            GlobalSettings(blocked_games=["Chess"]),
        )

        assert config.allowed_category_ids == frozenset({"10", "20"})
        assert config.blocked_category_ids == frozenset({"30"})
        assert config.blocked_category_names == frozenset({"Chess"})

    def test_hide_reruns_from_global(self):
        """测试隐藏重播来自全局设置。"""
        config = normalize(ContentKind.LIVE, None, GlobalSettings(hide_reruns=True))

        assert config.hide_reruns is True

    def test_hidden_video_types_are_inverted(self):
        """测试隐藏的视频类型取反为允许集合。"""
        config = normalize(
            ContentKind.VIDEO,
            ColumnSettings(types=["UPLOAD", "HIGHLIGHT"], no_recordings=True),
            None,
        )

        assert config.allowed_broadcast_types == frozenset(
            {"ARCHIVE", "PAST_PREMIERE", "PREMIERE_UPLOAD"}
        )
        assert config.hide_recordings is True

    def test_all_video_types_hidden_cannot_run(self):
        """测试隐藏全部视频类型时列不运行。"""
        config = normalize(
            ContentKind.VIDEO,
            ColumnSettings(
                types=["ARCHIVE", "HIGHLIGHT", "UPLOAD", "PAST_PREMIERE", "PREMIERE_UPLOAD"]
            ),
            None,
        )

        assert config.allowed_broadcast_types == frozenset()
        assert config.can_run is False

    def test_video_only_fields_ignored_for_other_kinds(self):
        """测试非视频列忽略视频专属设置。"""
        config = normalize(
            ContentKind.LIVE, ColumnSettings(types=["UPLOAD"], no_recordings=True), None
        )

        assert config.allowed_broadcast_types is None
        assert config.hide_recordings is False

    def test_sort_and_period_keys_validated(self):
        """测试排序与时间范围键。"""
        clip = normalize(
            ContentKind.CLIP, ColumnSettings(sort="VIEWS_DESC", period="LAST_WEEK"), None
        )
        live = normalize(
            ContentKind.LIVE, ColumnSettings(sort="VIEWS_DESC", period="LAST_WEEK"), None
        )

        assert clip.selected_sort_key == "VIEWS_DESC"
        assert clip.selected_period_key == "LAST_WEEK"
        assert clip.period.subtitle == "7d"
        assert live.selected_sort_key is None
        assert live.selected_period_key is None
        assert live.sort_option is None

    def test_normalization_is_deterministic(self):
        """测试相同输入得到相等配置。"""
        settings = ColumnSettings(tags=["c", "a", "b"], lang=["en"], sort="RECENT")
        shared = GlobalSettings(blocked_tags=["z"], blocked_games=["Chess"])

        first = normalize(ContentKind.LIVE, settings, shared)
        second = normalize(
            ContentKind.LIVE,
            ColumnSettings(tags=["b", "a", "c"], lang=["EN"], sort="RECENT"),
            GlobalSettings.model_validate(
                {"blocked_tags": ["z"], "blocked_games": ["Chess"]}
            ),
        )

        assert first == second
        assert first is not second

    def test_config_is_frozen(self):
        """测试配置快照不可修改。"""
        config = normalize(ContentKind.LIVE, None, None)

        with pytest.raises(ValidationError):
            config.hide_reruns = True


class TestShouldInvalidate:
    """should_invalidate 测试。"""

    def test_changed_settings_invalidate(self):
        """测试设置变化。"""
        assert should_invalidate(ColumnSettings(tags=["a"]), ColumnSettings()) is True

    def test_equal_settings_do_not_invalidate(self):
        """测试设置深度相等。"""
        assert (
            should_invalidate(ColumnSettings(tags=["a"]), ColumnSettings(tags=["a"]))
            is False
        )

    def test_new_settings_from_nothing_invalidate(self):
        """测试首次设置。"""
        assert should_invalidate(GlobalSettings(), None) is True

    def test_cleared_settings_invalidate(self):
        """测试清空设置。"""
        assert should_invalidate(None, ColumnSettings(tags=["a"])) is True

    def test_still_empty_does_not_invalidate(self):
        """测试始终为空。"""
        assert should_invalidate(None, None) is False


class TestSettingsCoerce:
    """SettingsRecord.coerce 测试。"""

    def test_coerce_mapping(self):
        """测试从字典构造并忽略未知键。"""
        settings = ColumnSettings.coerce({"tags": [1, 2], "color": "red"})

        assert settings == ColumnSettings(tags=["1", "2"])

    def test_coerce_passthrough(self):
        """测试模型与 None 原样返回。"""
        settings = GlobalSettings(hide_reruns=True)

        assert GlobalSettings.coerce(settings) is settings
        assert GlobalSettings.coerce(None) is None
