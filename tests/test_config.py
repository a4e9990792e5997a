"""
Tests for BumpBoard Configuration
"""


from bumpboard.config import (
    BoardConfig,
    Config,
    DAY,
    load_config,
    create_default_config,
)


class TestDefaults:
    """Tests for default configuration."""

    def test_defaults_valid(self):
        assert Config().validate() == []

    def test_default_boards(self):
        """The default boards and their limits."""
        config = Config()
        boards = {b.name: b for b in config.boards}

        assert list(boards) == [
            "fifa-2022",
            "ticket-booking",
            "rules_and_regulations",
            "merchandise",
            "other",
        ]
        assert boards["fifa-2022"].max_replies == 10
        assert boards["fifa-2022"].expiry_seconds == 7 * DAY
        assert boards["rules_and_regulations"].max_replies == 5
        assert boards["rules_and_regulations"].expiry_seconds == DAY
        assert all(b.max_threads == 20 for b in config.boards)


class TestValidation:
    """Tests for Config.validate()."""

    def test_duplicate_board(self):
        config = Config()
        config.boards.append(BoardConfig("other"))

        assert any("duplicate" in e for e in config.validate())

    def test_bad_limits(self):
        config = Config()
        config.boards = [BoardConfig("fifa-2022", max_threads=0, max_replies=0, expiry_seconds=0)]

        errors = config.validate()
        assert len(errors) == 3

    def test_default_board_must_exist(self):
        config = Config()
        config.forum.default_board = "nope"

        assert any("default_board" in e for e in config.validate())

    def test_tag_length(self):
        config = Config()
        config.identity.tag_length = 2

        assert any("tag_length" in e for e in config.validate())

    def test_cache_size(self):
        config = Config()
        config.cache.max_entries = 0

        assert any("cache" in e for e in config.validate())


class TestLoading:
    """Tests for TOML loading and saving."""

    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "absent.toml")

        assert len(config.boards) == 5

    def test_load_boards(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(
            '[forum]\n'
            'name = "Test"\n'
            'default_board = "tech"\n'
            '\n'
            '[[boards]]\n'
            'name = "tech"\n'
            'description = "Technology"\n'
            'max_threads = 5\n'
            'max_replies = 3\n'
            'expiry_seconds = 600\n'
            '\n'
            '[cache]\n'
            'max_entries = 50\n'
        )

        config = load_config(path)

        assert config.forum.name == "Test"
        assert config.boards == [BoardConfig("tech", "Technology", 5, 3, 600)]
        assert config.cache.max_entries == 50
        assert config.validate() == []

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / "config.toml"
        create_default_config(path)

        config = load_config(path)

        assert config == Config()
