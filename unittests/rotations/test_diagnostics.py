import logging

from unittest import TestCase

import numpy as np

from gimbal.rotations import (Quat, Rotator, DiagnosticOptions, configure_diagnostics, reset_diagnostics,
                              nan_check_enabled, nan_checking)


class TestDiagnostics(TestCase):

    def tearDown(self):

        reset_diagnostics()

    def test_default_disabled(self):

        self.assertFalse(nan_check_enabled())

        quaternion = Quat(np.nan, 0, 0, 0) + Quat()

        self.assertTrue(quaternion.contains_nan())

    def test_configure(self):

        configure_diagnostics(DiagnosticOptions(check_nan=True))

        self.assertTrue(nan_check_enabled())

        reset_diagnostics()

        self.assertFalse(nan_check_enabled())

    def test_context_manager(self):

        with nan_checking():
            self.assertTrue(nan_check_enabled())

            with nan_checking(False):
                self.assertFalse(nan_check_enabled())

            self.assertTrue(nan_check_enabled())

        self.assertFalse(nan_check_enabled())

    def test_context_manager_restores_on_error(self):

        with self.assertRaises(RuntimeError):
            with nan_checking():
                raise RuntimeError('failure')

        self.assertFalse(nan_check_enabled())

    def test_quat_sanitized(self):

        with nan_checking():
            with self.assertLogs('gimbal.rotations.quat', level=logging.WARNING):
                quaternion = Quat(np.nan, 0, 0, 0) + Quat()

            self.assertEqual(quaternion, Quat.identity())

            with self.assertLogs('gimbal.rotations.quat', level=logging.WARNING):
                quaternion = Quat() * np.inf

            self.assertEqual(quaternion, Quat.identity())

            quaternion = Quat(0.5, 0.5, 0.5, 0.5)

            with self.assertLogs('gimbal.rotations.quat', level=logging.WARNING):
                quaternion /= 0.0

            self.assertEqual(quaternion, Quat.identity())

    def test_rotator_sanitized(self):

        with nan_checking():
            rotator = Rotator(1, 2, 3)

            with self.assertLogs('gimbal.rotations.rotator', level=logging.WARNING) as logs:
                rotator.add(np.nan, 0, 0)

            self.assertIn('p=nan', logs.output[0])

            self.assertEqual(rotator, Rotator())

            with self.assertLogs('gimbal.rotations.rotator', level=logging.WARNING):
                quaternion = Rotator(np.inf, 0, 0).quaternion()

            self.assertEqual(quaternion, Quat.identity())

    def test_unchecked_values_kept(self):

        rotator = Rotator(1, 2, 3)

        rotator.add(np.nan, 0, 0)

        self.assertTrue(rotator.contains_nan())

    def test_quat_sanitized_before_conversion(self):

        quaternion = Quat(np.nan, 0, 0, 0)

        with nan_checking():
            with self.assertLogs('gimbal.rotations.quat', level=logging.WARNING):
                rotator = quaternion.get_rotator()

        self.assertEqual(quaternion, Quat.identity())

        self.assertEqual(rotator, Rotator())
