"""Tests for reading, merging and validating flavor table files."""

import logging
import os
import unittest.mock

import yaml

from flavorizr.config.exceptions import (
    DuplicateFlavorError,
    FlavorTableNotFoundError,
    InvalidFlavorTableError,
)
from flavorizr.config.loading import (
    PACKAGED_TABLE,
    load_flavor_table,
    resolve_overlay_paths,
    resolve_table_path,
)
from flavorizr.config.validators import UniqueNameValidator

from .base import BaseTableTest, PLAIN_FLAVORS, flavor_record

FIREBASE_OVERLAY = {
    'flavors': [
        {'name': 'dev', 'firebase_config_path': 'google-services-dev.json'},
        {'name': 'staging', 'firebase_config_path': 'google-services-staging.json'},
        {'name': 'prod', 'firebase_config_path': 'google-services.json'},
    ]
}


class TestLoadTable(BaseTableTest):
    """Loading a single table file."""

    def test_packaged_table_loads(self):
        table = load_flavor_table()
        self.assertEqual(table.dimension, "flavor-type")
        self.assertEqual(table.names(), ["dev", "staging", "prod"])
        self.assertEqual(table.source, (str(PACKAGED_TABLE),))

    def test_dimension_defaults(self):
        table = load_flavor_table(self.write_table(PLAIN_FLAVORS))
        self.assertEqual(table.dimension, "flavor-type")

    def test_custom_dimension(self):
        table = load_flavor_table(self.write_table(PLAIN_FLAVORS, dimension="environment"))
        self.assertEqual(table.dimension, "environment")

    def test_missing_file(self):
        with self.assertRaises(FlavorTableNotFoundError) as cm:
            load_flavor_table(self.tmp_dir / "absent.yaml")
        self.assertIn("absent.yaml", cm.exception.guidance)

    def test_malformed_yaml(self):
        path = self.tmp_dir / "broken.yaml"
        path.write_text("flavors: [unclosed\n")
        with self.assertRaises(InvalidFlavorTableError):
            load_flavor_table(path)

    def test_top_level_must_be_mapping(self):
        path = self.write_yaml("list.yaml", ["dev", "prod"])
        with self.assertRaises(InvalidFlavorTableError):
            load_flavor_table(path)

    def test_invalid_utf8_rejected(self):
        path = self.tmp_dir / "latin1.yaml"
        path.write_bytes(b"flavors:\n  - name: \xff\xfd\n")
        with self.assertRaises(InvalidFlavorTableError) as cm:
            load_flavor_table(path)
        self.assertEqual(cm.exception.path, str(path))

    def test_utf16_table_with_bom_loads(self):
        path = self.tmp_dir / "utf16.yaml"
        text = yaml.safe_dump({'flavors': PLAIN_FLAVORS}, sort_keys=False)
        path.write_bytes(text.encode("utf-16"))
        self.assertEqual(load_flavor_table(path).names(), ["dev", "staging", "prod"])

    def test_directory_rejected(self):
        with self.assertRaises(InvalidFlavorTableError) as cm:
            load_flavor_table(self.tmp_dir)
        self.assertIn("Not a regular file", str(cm.exception))

    def test_unknown_top_level_key_rejected(self):
        path = self.write_table(PLAIN_FLAVORS, dimensoin="environment")
        with self.assertRaises(InvalidFlavorTableError) as cm:
            load_flavor_table(path)
        self.assertIn("dimensoin", str(cm.exception))

    def test_non_string_name_rejected(self):
        records = [flavor_record(['dev'], 'com.example.flavorizr.dev', 'Flavorizr Dev')]
        with self.assertRaises(InvalidFlavorTableError):
            load_flavor_table(self.write_table(records))

    def test_empty_flavor_list_rejected(self):
        with self.assertRaises(InvalidFlavorTableError):
            load_flavor_table(self.write_table([]))

    def test_entry_without_name_rejected(self):
        with self.assertRaises(InvalidFlavorTableError):
            load_flavor_table(self.write_table([{'application_id': 'com.example.app'}]))

    def test_missing_required_field_reports_flavor(self):
        records = [flavor_record('dev', 'com.example.flavorizr.dev', 'Flavorizr Dev')]
        del records[0]['display_name']
        with self.assertRaises(InvalidFlavorTableError) as cm:
            load_flavor_table(self.write_table(records))
        self.assertEqual(len(cm.exception.errors), 1)
        self.assertTrue(cm.exception.errors[0].startswith("dev: display_name"))

    def test_name_outside_enumerated_set_rejected(self):
        records = PLAIN_FLAVORS + [flavor_record('qa', 'com.example.flavorizr.qa', 'Flavorizr QA')]
        with self.assertRaises(InvalidFlavorTableError) as cm:
            load_flavor_table(self.write_table(records))
        self.assertTrue(any(error.startswith("qa: name") for error in cm.exception.errors))

    def test_unknown_field_rejected(self):
        records = [flavor_record('dev', 'com.example.flavorizr.dev', 'Flavorizr Dev', icon='ic_dev')]
        with self.assertRaises(InvalidFlavorTableError):
            load_flavor_table(self.write_table(records))

    def test_duplicate_name_rejected(self):
        records = PLAIN_FLAVORS + [flavor_record('dev', 'com.example.flavorizr.dev2', 'Dev Again')]
        with self.assertRaises(DuplicateFlavorError) as cm:
            load_flavor_table(self.write_table(records))
        self.assertEqual(cm.exception.field, "name")
        self.assertEqual(cm.exception.flavors, ["dev", "dev"])

    def test_duplicate_application_id_rejected(self):
        records = [
            flavor_record('dev', 'com.example.flavorizr', 'Flavorizr Dev'),
            flavor_record('prod', 'com.example.flavorizr', 'Flavorizr'),
        ]
        with self.assertRaises(DuplicateFlavorError) as cm:
            load_flavor_table(self.write_table(records))
        self.assertEqual(cm.exception.field, "application_id")
        self.assertEqual(cm.exception.value, "com.example.flavorizr")
        self.assertEqual(cm.exception.flavors, ["dev", "prod"])

    def test_inconsistent_firebase_loads_with_warning(self):
        records = [
            flavor_record('dev', 'com.example.flavorizr.dev', 'Flavorizr Dev', 'google-services-dev.json'),
            flavor_record('prod', 'com.example.flavorizr', 'Flavorizr'),
        ]
        with self.assertLogs('flavorizr.config.loading', level=logging.WARNING) as logs:
            table = load_flavor_table(self.write_table(records))
        self.assertEqual(len(table.warnings), 1)
        self.assertIn("missing for prod", table.warnings[0])
        self.assertIn("missing for prod", logs.output[0])
        # The table is kept as declared
        self.assertIsNone(table.flavors[1].firebase_config_path)

    def test_explicit_validators_replace_defaults(self):
        records = [
            flavor_record('dev', 'com.example.flavorizr', 'Flavorizr Dev'),
            flavor_record('prod', 'com.example.flavorizr', 'Flavorizr'),
        ]
        table = load_flavor_table(self.write_table(records), validators=[UniqueNameValidator()])
        self.assertEqual(table.names(), ["dev", "prod"])


class TestValidatorsFromConfig(BaseTableTest):
    """Validators named under ``validators:`` in table files."""

    def test_validator_by_simple_name(self):
        records = [
            flavor_record('dev', 'com.example.flavorizr', 'Flavorizr Dev'),
            flavor_record('prod', 'com.example.flavorizr', 'Flavorizr'),
        ]
        path = self.write_table(records, validators=['UniqueApplicationIdValidator'])
        with self.assertRaises(DuplicateFlavorError):
            load_flavor_table(path, validators=[])

    def test_validator_by_dotted_path(self):
        path = self.write_table(
            PLAIN_FLAVORS,
            validators='flavorizr.config.validators.firebase.FirebaseConsistencyValidator',
        )
        table = load_flavor_table(path, validators=[])
        self.assertEqual(table.warnings, ())

    def test_unresolvable_validator(self):
        path = self.write_table(PLAIN_FLAVORS, validators=['NoSuchValidator'])
        with self.assertRaises(InvalidFlavorTableError):
            load_flavor_table(path)

    def test_validator_entries_must_be_strings(self):
        for value in ([1], {'UniqueNameValidator': True}, 7):
            with self.subTest(validators=value):
                path = self.write_table(PLAIN_FLAVORS, validators=value)
                with self.assertRaises(InvalidFlavorTableError):
                    load_flavor_table(path)

    def test_non_validator_class_rejected(self):
        path = self.write_table(PLAIN_FLAVORS, validators=['collections.OrderedDict'])
        with self.assertRaises(InvalidFlavorTableError):
            load_flavor_table(path)


class TestOverlays(BaseTableTest):
    """Overlays add per-flavor fields without copying the table."""

    def test_overlay_adds_firebase_config(self):
        table = load_flavor_table(
            self.write_table(PLAIN_FLAVORS),
            overlays=[self.write_yaml("firebase.yaml", FIREBASE_OVERLAY)],
        )
        self.assertEqual(
            [f.firebase_config_path for f in table.flavors],
            ["google-services-dev.json", "google-services-staging.json", "google-services.json"],
        )
        self.assertEqual(table.warnings, ())
        self.assertEqual(len(table.source), 2)

    def test_partial_overlay_warns(self):
        overlay = {'flavors': FIREBASE_OVERLAY['flavors'][:1]}
        table = load_flavor_table(
            self.write_table(PLAIN_FLAVORS),
            overlays=[self.write_yaml("partial.yaml", overlay)],
        )
        self.assertEqual(len(table.warnings), 1)
        self.assertIn("staging, prod", table.warnings[0])

    def test_overlays_apply_in_order(self):
        first = self.write_yaml("first.yaml", {'flavors': [{'name': 'dev', 'display_name': 'First'}]})
        second = self.write_yaml("second.yaml", {'flavors': [{'name': 'dev', 'display_name': 'Second'}]})
        table = load_flavor_table(self.write_table(PLAIN_FLAVORS), overlays=[first, second])
        self.assertEqual(table.flavors[0].display_name, "Second")

    def test_res_values_merge(self):
        first = self.write_yaml("first.yaml", {'flavors': [{'name': 'prod', 'res_values': {'api_host': 'api.example.com'}}]})
        second = self.write_yaml("second.yaml", {'flavors': [{'name': 'prod', 'res_values': {'support_email': 'help@example.com'}}]})
        table = load_flavor_table(self.write_table(PLAIN_FLAVORS), overlays=[first, second])
        self.assertEqual(
            dict(table.flavors[2].res_values),
            {'api_host': 'api.example.com', 'support_email': 'help@example.com'},
        )

    def test_overlay_does_not_modify_base_file(self):
        base = self.write_table(PLAIN_FLAVORS)
        before = base.read_text()
        load_flavor_table(base, overlays=[self.write_yaml("firebase.yaml", FIREBASE_OVERLAY)])
        self.assertEqual(base.read_text(), before)

    def test_overlay_unknown_flavor(self):
        overlay = self.write_yaml("qa.yaml", {'flavors': [{'name': 'qa', 'display_name': 'QA'}]})
        with self.assertRaises(InvalidFlavorTableError):
            load_flavor_table(self.write_table(PLAIN_FLAVORS), overlays=[overlay])

    def test_overlay_non_string_name(self):
        overlay = self.write_yaml("bad.yaml", {'flavors': [{'name': ['dev'], 'display_name': 'Dev'}]})
        with self.assertRaises(InvalidFlavorTableError):
            load_flavor_table(self.write_table(PLAIN_FLAVORS), overlays=[overlay])

    def test_overlay_unknown_top_level_key(self):
        overlay = self.write_yaml("bad.yaml", {'flavours': FIREBASE_OVERLAY['flavors']})
        with self.assertRaises(InvalidFlavorTableError):
            load_flavor_table(self.write_table(PLAIN_FLAVORS), overlays=[overlay])

    def test_overlay_cannot_redefine_app_name(self):
        overlay = self.write_yaml("bad.yaml", {'flavors': [{'name': 'dev', 'res_values': {'app_name': 'Other'}}]})
        with self.assertRaises(InvalidFlavorTableError):
            load_flavor_table(self.write_table(PLAIN_FLAVORS), overlays=[overlay])

    def test_overlay_res_values_must_be_mapping(self):
        overlay = self.write_yaml("bad.yaml", {'flavors': [{'name': 'dev', 'res_values': ['a', 'b']}]})
        with self.assertRaises(InvalidFlavorTableError):
            load_flavor_table(self.write_table(PLAIN_FLAVORS), overlays=[overlay])

    def test_empty_overlay_is_allowed(self):
        overlay = self.tmp_dir / "empty.yaml"
        overlay.write_text("")
        table = load_flavor_table(self.write_table(PLAIN_FLAVORS), overlays=[overlay])
        self.assertEqual(table.names(), ["dev", "staging", "prod"])

    def test_missing_overlay(self):
        with self.assertRaises(FlavorTableNotFoundError):
            load_flavor_table(self.write_table(PLAIN_FLAVORS), overlays=[self.tmp_dir / "nope.yaml"])


class TestPathResolution(BaseTableTest):
    """Default paths and environment overrides."""

    def test_explicit_path_wins(self):
        with unittest.mock.patch.dict(os.environ, {'FLAVORIZR_TABLE': '/elsewhere.yaml'}):
            self.assertEqual(resolve_table_path("mine.yaml").name, "mine.yaml")

    def test_env_table_path(self):
        with unittest.mock.patch.dict(os.environ, {'FLAVORIZR_TABLE': '/elsewhere.yaml'}):
            self.assertEqual(str(resolve_table_path()), "/elsewhere.yaml")

    def test_packaged_table_by_default(self):
        self.assertEqual(resolve_table_path(), PACKAGED_TABLE)

    def test_env_overlays(self):
        value = os.pathsep.join(["a.yaml", "", "b.yaml"])
        with unittest.mock.patch.dict(os.environ, {'FLAVORIZR_OVERLAYS': value}):
            self.assertEqual([p.name for p in resolve_overlay_paths()], ["a.yaml", "b.yaml"])
            self.assertEqual(resolve_overlay_paths([]), [])

    def test_env_overlays_applied_on_load(self):
        base = self.write_table(PLAIN_FLAVORS)
        overlay = self.write_yaml("firebase.yaml", FIREBASE_OVERLAY)
        with unittest.mock.patch.dict(os.environ, {'FLAVORIZR_OVERLAYS': str(overlay)}):
            table = load_flavor_table(base)
        self.assertEqual(table.flavors[2].firebase_config_path, "google-services.json")
