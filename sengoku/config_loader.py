import json
import logging
import os

from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from sengoku.models import LifeRules
from sengoku.paths import CONFIG_DIR
from sengoku.travel import MapLocation

###############################
### Imported to other files ###
###############################
# Toggle this to True if you want to print info about which files were loaded
LOADED_INFO_FILES = False
###############################


class ConfigLoader:
    def __init__(self, config_folder=CONFIG_DIR):
        self.config_folder = config_folder
        self.config = {}
        self.load_configs()
        self.validate_configs()

    def load_configs(self):
        config_files = {
            'rules': 'rules.json',
            'map_locations': 'map_locations.json'
        }

        for category, filename in config_files.items():
            file_path = os.path.join(self.config_folder, filename)
            if not os.path.exists(file_path):
                raise FileNotFoundError(f"Configuration file {filename} not found in {self.config_folder}.")
            with open(file_path, 'r', encoding='utf-8') as file:
                try:
                    self.config[category] = json.load(file)
                    if LOADED_INFO_FILES:
                        logging.info(f"Loaded configuration from {filename}.")
                except json.JSONDecodeError as e:
                    raise ValueError(f"Error parsing {filename}: {e}")

    def validate_configs(self):
        # Validate rules config
        rules = self.config.get('rules', {})
        if not isinstance(rules, dict):
            raise ValueError("rules.json must contain a JSON object.")
        try:
            self.life_rules = LifeRules.model_validate(rules)
        except ValidationError as e:
            raise ValueError(f"Invalid rules configuration: {e}")

        known_keys = set(LifeRules.model_fields)
        known_keys.update(to_camel(name) for name in LifeRules.model_fields)
        for key in rules:
            if key not in known_keys:
                logging.warning(f"Rules parameter '{key}' is not recognised and will be ignored.")

        # Validate map locations
        map_config = self.config.get('map_locations', {})
        if not isinstance(map_config, dict):
            raise ValueError("map_locations.json must contain a JSON object.")
        locations = map_config.get('locations')
        if not locations:
            raise ValueError("No locations defined in map_locations configuration.")

        self.map_locations = []
        seen_ids = set()
        for entry in locations:
            try:
                location = MapLocation.model_validate(entry)
            except ValidationError as e:
                entry_id = entry.get('id', '?') if isinstance(entry, dict) else '?'
                raise ValueError(f"Invalid map location {entry_id}: {e}")
            if location.id in seen_ids:
                raise ValueError(f"Duplicate map location id '{location.id}'.")
            seen_ids.add(location.id)
            self.map_locations.append(location)

    def get_life_rules(self):
        return self.life_rules

    def get_map_locations(self):
        return list(self.map_locations)

    def get_location(self, location_id):
        for location in self.map_locations:
            if location.id == location_id:
                return location
        return None
