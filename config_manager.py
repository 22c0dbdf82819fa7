"""Configuration management for the Latin square toolbox.

This module provides a thin, explicit wrapper around a JSON configuration file
to centralize job defaults and output preferences.

File format (high-level)
------------------------
- job_settings: job mode, order, data set size, super-symmetric base/power,
  and input file for the file-based jobs.
- output_settings: per-square printing toggles, job report, CSV/plot exports,
  output directory and run tag.

All methods return Python native types; the class does not validate semantics
beyond presence of keys to keep responsibilities minimal (semantic checks live
in ``latinsquares.analysis.jobconfig.JobConfig.validate``).
"""
import json
from pathlib import Path


class ConfigManager:
    """Load, query, and persist the toolbox configuration.

    Parameters
    ----------
    config_path : str | os.PathLike, default "config.json"
        Path to the configuration file.
    """

    def __init__(self, config_path="config.json"):
        self.config_path = Path(config_path)
        self.config = self.load_config()

    def load_config(self):
        """Load and parse the JSON configuration file.

        Returns
        -------
        dict
            Root configuration object.
        """
        if not self.config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_path}\n"
                f"Create it or use the default config.json template"
            )

        with open(self.config_path, 'r') as f:
            return json.load(f)

    def save_config(self):
        """Persist the current in-memory configuration to disk."""
        with open(self.config_path, 'w') as f:
            json.dump(self.config, f, indent=2)

    def get_job_settings(self):
        """Return job defaults (mode, order, size, base, power, input file)."""
        return self.config.get("job_settings", {})

    def get_output_settings(self):
        """Return output toggles (printing flags, report, exports, directory)."""
        return self.config.get("output_settings", {})

    def update_setting(self, section, key, value):
        """Update a specific setting and persist the change immediately."""
        if section not in self.config:
            self.config[section] = {}
        self.config[section][key] = value
        self.save_config()
