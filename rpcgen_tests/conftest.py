import os

from rpcgen.conf import DEFAULT_SETTINGS_FILEPATH

os.environ['RPCGEN_CONFIG_YAML'] = os.environ.get('RPCGEN_TEST_CONFIG_YAML', DEFAULT_SETTINGS_FILEPATH)
