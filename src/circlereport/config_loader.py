"""
Configuration loader for complaint reports.

Loads settings from YAML config files.
"""

import os

import yaml

DEFAULT_SETTINGS = {
    'title': 'C&D Waste Complaint Report',
    'wards_file': 'wards_by_circle.txt',
    'data_file': None,
    'output_dir': 'output',
    'html_filename': 'complaint_report.html',
}


def find_config_dir():
    """Find the config directory, checking ./config then ./circlereport/config."""
    for candidate in ('config', os.path.join('circlereport', 'config')):
        if os.path.isdir(candidate):
            return os.path.abspath(candidate)
    return None


def load_settings(config_dir, settings_file='settings.yaml'):
    """Load main settings from settings.yaml (or specified file)."""
    settings_path = os.path.join(config_dir, settings_file)

    if not os.path.exists(settings_path):
        raise FileNotFoundError(f"Settings file not found: {settings_path}")

    with open(settings_path, 'r', encoding='utf-8') as f:
        settings = yaml.safe_load(f)

    if settings is None:
        return {}
    if not isinstance(settings, dict):
        raise ValueError(f"{settings_file} must contain key: value settings, got {type(settings).__name__}")
    return settings


def resolve_data_path(config_dir, data_file):
    """Resolve a data file path relative to the directory above config/."""
    if not data_file:
        return None
    if os.path.isabs(data_file):
        return data_file
    return os.path.normpath(os.path.join(os.path.dirname(config_dir), data_file))


def load_config(config_dir, settings_file='settings.yaml'):
    """Load all configuration files.

    Args:
        config_dir: Path to config directory containing settings.yaml and the wards file.
        settings_file: Name of the settings file to load (default: settings.yaml)

    Returns:
        dict with all configuration values, plus resolved paths:
        '_config_dir', '_wards_path' and '_data_path' (None if no data_file).
        A missing wards file is not fatal; it is reported in '_warnings'.
    """
    config_dir = os.path.abspath(config_dir)

    if not os.path.isdir(config_dir):
        raise FileNotFoundError(f"Config directory not found: {config_dir}")

    config = dict(DEFAULT_SETTINGS)
    config.update(load_settings(config_dir, settings_file))

    for key in ('wards_file', 'output_dir', 'html_filename'):
        if not isinstance(config.get(key), str) or not config[key]:
            raise ValueError(f"'{key}' in {settings_file} must be a non-empty string")

    config['_config_dir'] = config_dir
    config['_settings_file'] = settings_file
    config['_wards_path'] = os.path.join(config_dir, config['wards_file'])
    config['_data_path'] = resolve_data_path(config_dir, config.get('data_file'))

    warnings = []
    if not os.path.exists(config['_wards_path']):
        warnings.append({
            'type': 'warning',
            'source': settings_file,
            'message': f"Wards file not found: {config['wards_file']}",
            'suggestion': f"Create {config['wards_file']} in {config_dir} or fix wards_file in {settings_file}. "
                          "Circle and ward filters will have no effect.",
        })
    config['_warnings'] = warnings

    return config
