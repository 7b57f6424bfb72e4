"""Tests for configuration management."""

import pytest
import yaml
from pathlib import Path

from config.config_manager import (
    AuthConfig,
    ConfigManager,
    ContentConfig,
    LoggingConfig,
    StorageConfig,
)


class TestConfigManager:
    """Test suite for ConfigManager."""

    @pytest.fixture
    def config_path(self, tmp_path):
        """Path for a user configuration file."""
        return tmp_path / "config" / "settings.yaml"

    @pytest.fixture
    def sample_config(self):
        """Sample configuration dictionary."""
        return {
            'auth': {
                'username_min_length': 4,
                'password_min_length': 10,
                'accounts': [{'username': 'editor', 'password': 'editor-pass'}]
            },
            'content': {
                'default_comment_author': 'Anonymous',
                'seed_posts': []
            },
            'storage': {
                'persist': False,
                'db_path': '~/blog-test/blog.db'
            },
            'logging': {
                'level': 'DEBUG',
                'log_path': '~/blog-test/app.log'
            }
        }

    def write(self, path: Path, data) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            yaml.dump(data, f)

    def test_load_bundled_defaults(self, config_path):
        """Test that a missing user file falls back to bundled defaults and is created."""
        manager = ConfigManager(config_path)

        assert config_path.exists()
        assert manager.get_config('auth', 'username_min_length') == 3
        assert manager.get_config('auth', 'password_min_length') == 8
        assert manager.get_config('auth', 'accounts') == [
            {'username': 'admin', 'password': 'admin123'}
        ]
        assert manager.get_config('content', 'default_comment_author') == 'Guest'

    def test_bundled_seed_posts(self, config_path):
        """Test the home page posts shipped with the defaults."""
        manager = ConfigManager(config_path)
        titles = [p['title'] for p in manager.get_content_config().seed_posts]
        assert titles == ['First Blog Post', 'Another Post']

    def test_user_config_overrides(self, config_path, sample_config):
        """Test that user values win over defaults."""
        self.write(config_path, sample_config)
        manager = ConfigManager(config_path)

        assert manager.get_config('auth', 'username_min_length') == 4
        assert manager.get_config('storage', 'persist') is False
        assert manager.get_config('logging', 'level') == 'DEBUG'

    def test_partial_user_config_merges(self, config_path):
        """Test that a partial user file keeps the remaining defaults."""
        self.write(config_path, {'logging': {'level': 'WARNING'}})
        manager = ConfigManager(config_path)

        assert manager.get_config('logging', 'level') == 'WARNING'
        assert manager.get_config('logging', 'log_path') == '~/.blog_core/logs/app.log'
        assert manager.get_config('auth', 'password_min_length') == 8

    def test_get_config_section(self, config_path):
        """Test getting an entire section."""
        manager = ConfigManager(config_path)
        storage = manager.get_config('storage')

        assert isinstance(storage, dict)
        assert storage['persist'] is True

    def test_missing_keys(self, config_path):
        """Test errors for unknown sections and keys."""
        manager = ConfigManager(config_path)

        with pytest.raises(KeyError):
            manager.get_config('network')
        with pytest.raises(KeyError):
            manager.get_config('auth', 'missing')
        with pytest.raises(KeyError):
            manager.set_config('network', 'port', 1)

    def test_set_and_save_config(self, config_path):
        """Test that saved values load back."""
        manager = ConfigManager(config_path)
        manager.set_config('content', 'default_comment_author', 'Reader')
        manager.save_config()

        reloaded = ConfigManager(config_path)
        assert reloaded.get_config('content', 'default_comment_author') == 'Reader'

    def test_env_overrides(self, config_path, monkeypatch):
        """Test BLOG_CORE_ environment overrides and value conversion."""
        monkeypatch.setenv('BLOG_CORE_STORAGE__PERSIST', 'false')
        monkeypatch.setenv('BLOG_CORE_AUTH__PASSWORD_MIN_LENGTH', '12')
        monkeypatch.setenv('BLOG_CORE_LOGGING__LEVEL', 'ERROR')
        monkeypatch.setenv('BLOG_CORE_UNKNOWN__KEY', 'ignored')

        manager = ConfigManager(config_path)

        assert manager.get_config('storage', 'persist') is False
        assert manager.get_config('auth', 'password_min_length') == 12
        assert manager.get_config('logging', 'level') == 'ERROR'

    def test_invalid_yaml(self, config_path):
        """Test that malformed YAML is reported."""
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text("auth: [unclosed", encoding='utf-8')

        with pytest.raises(ValueError, match="Invalid YAML"):
            ConfigManager(config_path)

    @pytest.mark.parametrize("section,key,value", [
        ('auth', 'username_min_length', 0),
        ('auth', 'password_min_length', 'eight'),
        ('auth', 'accounts', 'admin'),
        ('storage', 'persist', 'yes please'),
        ('content', 'seed_posts', {}),
    ])
    def test_validation(self, config_path, section, key, value):
        """Test that bad values are rejected on load."""
        self.write(config_path, {section: {key: value}})

        with pytest.raises(ValueError):
            ConfigManager(config_path)

    def test_bool_is_not_an_int(self, config_path):
        """Test that a boolean can't stand in for a length."""
        self.write(config_path, {'auth': {'username_min_length': True}})

        with pytest.raises(ValueError):
            ConfigManager(config_path)

    def test_account_entries_validated(self, config_path):
        """Test that each account needs a username and password."""
        self.write(config_path, {'auth': {'accounts': [{'username': 'admin'}]}})

        with pytest.raises(ValueError, match="password"):
            ConfigManager(config_path)

    def test_dataclass_views(self, config_path, sample_config):
        """Test typed access to each section."""
        self.write(config_path, sample_config)
        manager = ConfigManager(config_path)

        assert manager.get_auth_config() == AuthConfig(
            username_min_length=4,
            password_min_length=10,
            accounts=[{'username': 'editor', 'password': 'editor-pass'}]
        )
        assert manager.get_content_config() == ContentConfig(
            default_comment_author='Anonymous', seed_posts=[]
        )
        assert manager.get_storage_config() == StorageConfig(
            persist=False, db_path='~/blog-test/blog.db'
        )
        assert manager.get_logging_config() == LoggingConfig(
            level='DEBUG', log_path='~/blog-test/app.log'
        )

    def test_expand_path(self, config_path, monkeypatch):
        """Test expansion of ~ and environment variables."""
        monkeypatch.setenv('BLOG_TEST_DIR', '/srv/blog')
        manager = ConfigManager(config_path)

        assert manager.expand_path('$BLOG_TEST_DIR/blog.db') == Path('/srv/blog/blog.db')
        assert manager.expand_path('~/blog.db') == Path.home() / 'blog.db'
