import os
import tempfile
from unittest import mock

import pytest
import yaml

from clarifai_v1.utils.config import Config, Context
from clarifai_v1.utils.constants import DEFAULT_BASE


@pytest.fixture
def temp_config_file():
    """Create a temporary config file for testing."""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        test_config = {
            'current_context': 'test_context',
            'contexts': {
                'test_context': {
                    'CLARIFAI_APP_ID': 'test_app',
                    'CLARIFAI_APP_SECRET': 'test_secret',
                    'CLARIFAI_API_BASE': 'https://api.test.com'
                },
                'alternate_context': {
                    'CLARIFAI_APP_ID': 'alternate_app',
                    'CLARIFAI_APP_SECRET': 'ENVVAR',
                    'model': 'general-v1.3'
                }
            }
        }
        yaml.dump(test_config, f)
        file_name = f.name

    yield file_name

    try:
        os.unlink(file_name)
    except OSError:
        pass


class TestContext:

    def test_context_init_with_env(self):
        env = {'CLARIFAI_APP_ID': 'test_app'}
        context = Context('test_context', env=env)

        assert context['name'] == 'test_context'
        assert context['env'] == env

    def test_context_init_with_kwargs(self):
        context = Context('test_context', CLARIFAI_APP_ID='test_app', CLARIFAI_APP_SECRET='s')

        assert context['env'] == {'CLARIFAI_APP_ID': 'test_app', 'CLARIFAI_APP_SECRET': 's'}

    def test_context_getattr(self):
        context = Context('test_context', CLARIFAI_APP_ID='test_app', model='general-v1.3')

        with mock.patch.dict(os.environ, {}, clear=True):
            assert context.app_id == 'test_app'
            assert context.model == 'general-v1.3'
            assert context.name == 'test_context'
            with pytest.raises(AttributeError):
                context.nonexistent_attr
            assert context.get('nonexistent_attr', 'fallback') == 'fallback'

    def test_environment_takes_precedence(self):
        context = Context('test_context', CLARIFAI_APP_ID='test_app')

        with mock.patch.dict(os.environ, {'CLARIFAI_APP_ID': 'env_app'}):
            assert context.app_id == 'env_app'

    def test_envvar_marker(self):
        context = Context('test_context', CLARIFAI_APP_SECRET='ENVVAR')

        with mock.patch.dict(os.environ, {'CLARIFAI_APP_SECRET': 'env_secret'}):
            assert context.app_secret == 'env_secret'
        with mock.patch.dict(os.environ, {}, clear=True):
            with pytest.raises(AttributeError, match='not set'):
                context.app_secret
            assert context.get('app_secret') is None

    def test_api_base_default(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            assert Context('empty').api_base == DEFAULT_BASE


class TestConfig:

    def test_from_yaml(self, temp_config_file):
        config = Config.from_yaml(temp_config_file)

        assert config.current_context == 'test_context'
        assert set(config.contexts) == {'test_context', 'alternate_context'}
        with mock.patch.dict(os.environ, {}, clear=True):
            assert config.current.app_id == 'test_app'
            assert config.current.api_base == 'https://api.test.com'
            assert config.contexts['alternate_context'].model == 'general-v1.3'

    def test_missing_file_gives_empty_context(self, tmp_path):
        config = Config.from_yaml(str(tmp_path / 'missing'))

        assert config.current['env'] == {}
        with mock.patch.dict(os.environ, {}, clear=True):
            assert config.current.get('app_id') is None

    def test_unknown_current_context(self):
        config = Config(current_context='gone', filename='unused', contexts={'a': {}})

        assert config.current.name == '_empty_'
