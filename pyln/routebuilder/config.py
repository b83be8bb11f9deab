import os


VARS_FILE = 'routebuilder.vars'
PREFIX = 'ROUTEBUILDER_'


def env(name, default=None):
    """Access to environment variables

    Allows access to `ROUTEBUILDER_`-prefixed environment variables,
    falling back to `routebuilder.vars` in the working directory (one
    `KEY=value` per line), and finally falling back to a default value.

    """
    key = PREFIX + name
    if key in os.environ:
        return os.environ[key]

    if os.path.exists(VARS_FILE):
        with open(VARS_FILE, 'r') as f:
            lines = [line.strip() for line in f]
        config = dict([line.split('=', 1) for line in lines
                       if line and not line.startswith('#') and '=' in line])
    else:
        config = {}

    return config.get(key, default)


def log_level():
    return env('LOG_LEVEL', 'INFO').upper()


def output_filename():
    return env('OUTPUT_FILENAME', 'output.csv')
