from src.common import \
    ICPInvalidInputError, \
    PointType, \
    RotationComposition, \
    SeverityLabel
from src.icp import \
    IterativeClosestPoint, \
    load_icp_configuration
from src.icp.fileio.icp_configuration import PACKAGE_LOGGER_NAME
import logging
import os
import tempfile
import unittest


class TestICPConfiguration(unittest.TestCase):

    _temporary_directory: tempfile.TemporaryDirectory
    _package_logging_level: int

    def setUp(self):
        self._temporary_directory = tempfile.TemporaryDirectory()
        self._package_logging_level = logging.getLogger(PACKAGE_LOGGER_NAME).level

    def tearDown(self):
        self._temporary_directory.cleanup()
        logging.getLogger(PACKAGE_LOGGER_NAME).setLevel(self._package_logging_level)

    def _write(
        self,
        filename: str,
        contents: str
    ) -> str:
        filepath = os.path.join(self._temporary_directory.name, filename)
        with open(filepath, 'w', encoding='utf-8') as output_file:
            output_file.write(contents)
        return filepath

    def test_load_hjson(self):
        filepath = self._write(
            "icp.hjson",
            "{\n"
            "  # comments are allowed in hjson\n"
            "  settings: {\n"
            "    point_type: 1\n"
            "    max_iterations: 25\n"
            "  }\n"
            "  log_level: debug\n"
            "}\n")
        configuration = load_icp_configuration(filepath)
        self.assertEqual(configuration.settings.point_type, PointType.THREE_D)
        self.assertEqual(configuration.settings.dimension(), 3)
        self.assertEqual(configuration.settings.max_iterations, 25)
        self.assertEqual(configuration.settings.rotation_composition, RotationComposition.MATRIX)
        self.assertIsNone(configuration.settings.initial_rotation)
        self.assertEqual(configuration.log_level, SeverityLabel.DEBUG)
        self.assertEqual(configuration.logging_level(), logging.DEBUG)

    def test_loaded_settings_drive_solver(self):
        filepath = self._write(
            "icp.json",
            '{"settings": {"point_type": 0, "max_iterations": 3, "rotation_composition": "angle_2d"}}')
        configuration = load_icp_configuration(filepath)
        self.assertEqual(configuration.log_level, SeverityLabel.INFO)
        points = [[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]]
        output = IterativeClosestPoint(points, points, configuration.settings).solve()
        self.assertEqual(output.iteration_count, 3)

    def test_missing_file(self):
        with self.assertRaises(ICPInvalidInputError):
            load_icp_configuration(os.path.join(self._temporary_directory.name, "missing.hjson"))

    def test_directory_instead_of_file(self):
        with self.assertRaises(ICPInvalidInputError):
            load_icp_configuration(self._temporary_directory.name)

    def test_unparsable_file(self):
        filepath = self._write("broken.hjson", '{"settings": {"point_type": 0')
        with self.assertRaises(ICPInvalidInputError):
            load_icp_configuration(filepath)

    def test_invalid_settings(self):
        filepath = self._write("negative.hjson", '{"settings": {"point_type": 0, "max_iterations": -1}}')
        with self.assertRaises(ICPInvalidInputError):
            load_icp_configuration(filepath)
        filepath = self._write("missing.hjson", '{"log_level": "info"}')
        with self.assertRaises(ICPInvalidInputError):
            load_icp_configuration(filepath)
        filepath = self._write("unknown.hjson", '{"settings": {"point_type": 5, "max_iterations": 1}}')
        with self.assertRaises(ICPInvalidInputError):
            load_icp_configuration(filepath)

    def test_log_level_is_applied(self):
        solver_logger = logging.getLogger("src.icp.iterative_closest_point")
        filepath = self._write(
            "debug.hjson",
            '{"settings": {"point_type": 0, "max_iterations": 1}, "log_level": "debug"}')
        load_icp_configuration(filepath)
        self.assertEqual(logging.getLogger(PACKAGE_LOGGER_NAME).level, logging.DEBUG)
        self.assertTrue(solver_logger.isEnabledFor(logging.DEBUG))
        filepath = self._write(
            "error.hjson",
            '{"settings": {"point_type": 0, "max_iterations": 1}, "log_level": "error"}')
        load_icp_configuration(filepath)
        self.assertEqual(logging.getLogger(PACKAGE_LOGGER_NAME).level, logging.ERROR)
        self.assertFalse(solver_logger.isEnabledFor(logging.INFO))
