from unittest import TestCase

import numpy as np

from gimbal.rotations import Transform, TransformOptions, Rotator, Quat, Matrix3x3


class TestTransform(TestCase):

    def setUp(self):

        self.transform = Transform()

        self.notifications = []

        self.transform.subscribe(self.notifications.append)

    def test_defaults(self):

        np.testing.assert_array_equal(self.transform.position, [0, 0, 0])

        np.testing.assert_array_equal(self.transform.scale, [1, 1, 1])

        self.assertEqual(self.transform.rotation, Quat.identity())

        self.assertTrue(self.transform.rotator.is_zero())

        np.testing.assert_array_equal(self.transform.model_matrix, np.eye(4))

        self.assertEqual(self.transform.tag, '')

    def test_options(self):

        options = TransformOptions(initial_position=(1, 2, 3), initial_scale=(2, 2, 2), initial_rotation=(0, 90, 0),
                                   initial_tag='Player NoSave')

        transform = Transform(options=options)

        np.testing.assert_array_equal(transform.position, [1, 2, 3])

        np.testing.assert_array_equal(transform.scale, [2, 2, 2])

        self.assertEqual(transform.rotator, Rotator(0, 90, 0))

        self.assertEqual(transform.rotation, Rotator(0, 90, 0).quaternion())

        self.assertTrue(transform.has_tag('NoSave'))

    def test_reset_settings(self):

        options = TransformOptions(initial_position=(1, 2, 3), initial_tag='Player')

        transform = Transform(options=options)

        notifications = []
        transform.subscribe(notifications.append)

        transform.set_position(4, 5, 6)
        transform.rotator = Rotator(10, 20, 30)
        transform.add_tag('Enemy')

        transform.reset_settings()

        np.testing.assert_array_equal(transform.position, [1, 2, 3])

        self.assertEqual(transform.rotation, Quat.identity())

        self.assertEqual(transform.tag, 'Player')

        np.testing.assert_array_equal(transform.model_matrix[:, 3], [1, 2, 3, 1])

        self.assertEqual(len(notifications), 3)

        self.assertIs(transform.original_options, options)

    def test_rotation_setter(self):

        quaternion = Quat.make_from_euler(10, 20, 30)

        # derive the cached rotator so we can check it is invalidated
        _ = self.transform.rotator

        self.transform.rotation = quaternion

        self.assertIsNone(self.transform._rotator)
        self.assertIsNone(self.transform._model_matrix)

        self.assertEqual(self.transform.rotation, quaternion)

        self.assertIsNot(self.transform._rotation, quaternion)

        self.assertTrue(self.transform.rotator.equals(Rotator(10, 20, 30)))

        self.assertIsNotNone(self.transform._rotator)

        self.assertEqual(self.notifications, [self.transform])

        with self.assertRaises(TypeError):
            self.transform.rotation = Rotator()

    def test_rotator_setter(self):

        rotator = Rotator(0, 0, 360)

        self.transform.rotator = rotator

        # the written angles are kept as given
        self.assertEqual(self.transform.rotator, Rotator(0, 0, 360))

        self.assertEqual(self.transform.rotation, rotator.quaternion())

        rotator.roll = 5

        self.assertEqual(self.transform.rotator, Rotator(0, 0, 360))

        self.assertEqual(len(self.notifications), 1)

        with self.assertRaises(TypeError):
            self.transform.rotator = Quat()

    def test_returns_copies(self):

        rotation = self.transform.rotation
        rotation.w = 0

        self.assertEqual(self.transform.rotation, Quat.identity())

        rotator = self.transform.rotator
        rotator.yaw = 45

        self.assertTrue(self.transform.rotator.is_zero())

        position = self.transform.position
        position[0] = 10

        np.testing.assert_array_equal(self.transform.position, [0, 0, 0])

        model = self.transform.model_matrix
        model[0, 0] = 10

        np.testing.assert_array_equal(self.transform.model_matrix, np.eye(4))

        self.assertEqual(self.notifications, [])

    def test_rotate(self):

        self.transform.rotate(Rotator(0, 90, 0))

        np.testing.assert_allclose(self.transform.rotate_vector([1, 0, 0]), [0, 1, 0], atol=1e-15)

        self.transform.rotate(Quat.make_from_euler(0, 90, 0))

        np.testing.assert_allclose(self.transform.rotate_vector([1, 0, 0]), [-1, 0, 0], atol=1e-15)

        np.testing.assert_allclose(self.transform.unrotate_vector([-1, 0, 0]), [1, 0, 0], atol=1e-15)

        self.assertTrue(self.transform.rotator.equals(Rotator(0, 180, 0)))

        self.assertEqual(len(self.notifications), 2)

        with self.assertRaises(TypeError):
            self.transform.rotate([1, 0, 0, 0])

    def test_rotate_order(self):

        first = Quat.make_from_euler(10, 0, 0)
        second = Quat.make_from_euler(0, 40, 0)

        self.transform.rotation = first
        self.transform.rotate(second)

        self.assertTrue(self.transform.rotation.equals(second * first, tolerance=1e-12))

    def test_position(self):

        self.transform.position = [1, 2, 3]

        np.testing.assert_array_equal(self.transform.position, [1, 2, 3])

        self.transform.set_position(4, 5, 6)

        np.testing.assert_array_equal(self.transform.position, [4, 5, 6])

        self.assertEqual(len(self.notifications), 2)

        with self.assertRaises(ValueError):
            self.transform.position = [1, 2]

    def test_scale(self):

        self.transform.scale = [1, 2, 3]

        np.testing.assert_array_equal(self.transform.scale, [1, 2, 3])

        self.transform.set_scale(4, 5, 6)

        np.testing.assert_array_equal(self.transform.scale, [4, 5, 6])

        self.transform.set_scale(2)

        np.testing.assert_array_equal(self.transform.scale, [2, 2, 2])

        self.assertEqual(len(self.notifications), 3)

        with self.assertRaises(ValueError):
            self.transform.set_scale(1, 2)

    def test_model_matrix(self):

        self.transform.set_scale(2)
        self.transform.set_position(1, 2, 3)
        self.transform.rotator = Rotator(0, 90, 0)

        expected = np.array([[0, 0, -2, 1],
                             [0, 2, 0, 2],
                             [2, 0, 0, 3],
                             [0, 0, 0, 1]])

        np.testing.assert_allclose(self.transform.model_matrix, expected, atol=1e-12)

        self.assertIsNotNone(self.transform._model_matrix)

        self.transform.set_position(0, 0, 0)

        self.assertIsNone(self.transform._model_matrix)

        np.testing.assert_allclose(self.transform.model_matrix[:3, 3], [0, 0, 0])

    def test_model_matrix_composition(self):

        self.transform.set_scale(1, 2, 3)
        self.transform.set_position(-1, 0.5, 4)
        self.transform.rotator = Rotator(30, -60, 15)

        rotation = np.eye(4)
        rotation[:3, :3] = Rotator(30, -60, 15).quaternion().matrix().as_array().T

        translation = np.eye(4)
        translation[:3, 3] = [-1, 0.5, 4]

        expected = translation @ rotation @ np.diag([1, 2, 3, 1])

        np.testing.assert_allclose(self.transform.model_matrix, expected, atol=1e-12)

    def test_model_matrix_applies_rotation_matrix(self):

        vector = np.array([0.3, -1.2, 2.5])

        for angles in [(0, 90, 0), (30, -60, 15), (120, 0, 0), (-45, 170, 80)]:
            with self.subTest(angles=angles):
                self.transform.rotator = Rotator(*angles)

                np.testing.assert_allclose(self.transform.model_matrix[:3, :3] @ vector,
                                           self.transform.rotation_matrix * vector, atol=1e-12)

    def test_model_matrix_follows_quaternion(self):

        for angles in [(120, 0, 0), (90, -170, -170), (0, 0, 360)]:
            with self.subTest(angles=angles):
                from_rotator = Transform()
                from_rotator.rotator = Rotator(*angles)

                from_quaternion = Transform()
                from_quaternion.rotation = from_rotator.rotation

                self.assertEqual(from_rotator.rotation, from_quaternion.rotation)

                # the written angles are still read back as given
                self.assertEqual(from_rotator.rotator, Rotator(*angles))

                np.testing.assert_array_equal(from_rotator.model_matrix, from_quaternion.model_matrix)

                self.assertTrue(from_rotator.rotation_matrix.equals(from_quaternion.rotation_matrix, tolerance=0))

    def test_rotation_matrix(self):

        self.transform.rotation = Quat.make_from_euler(0, 90, 0)

        rotation_matrix = self.transform.rotation_matrix

        self.assertIsInstance(rotation_matrix, Matrix3x3)

        self.assertTrue(rotation_matrix.equals(Rotator(0, 90, 0).matrix()))

    def test_subscribe(self):

        second = []

        self.transform.subscribe(second.append)
        self.transform.subscribe(second.append)

        self.transform.set_position(1, 1, 1)

        self.assertEqual(len(self.notifications), 1)
        self.assertEqual(len(second), 1)

        self.transform.unsubscribe(second.append)
        self.transform.unsubscribe(second.append)

        self.transform.set_position(2, 2, 2)

        self.assertEqual(len(self.notifications), 2)
        self.assertEqual(len(second), 1)

    def test_notify_order(self):

        calls = []

        transform = Transform()
        transform.subscribe(lambda t: calls.append('first'))
        transform.subscribe(lambda t: calls.append('second'))

        transform.notify()

        self.assertEqual(calls, ['first', 'second'])

    def test_write_during_notification(self):

        calls = []

        def observer(transform):
            calls.append(transform.position.copy())
            # keep the transform above the ground
            if transform.position[2] < 0:
                transform.set_position(transform.position[0], transform.position[1], 0)

        transform = Transform()
        transform.subscribe(observer)

        transform.set_position(1, 2, -5)

        self.assertEqual(len(calls), 1)

        np.testing.assert_array_equal(calls[0], [1, 2, -5])

        np.testing.assert_array_equal(transform.position, [1, 2, 0])

        np.testing.assert_array_equal(transform.model_matrix[:3, 3], [1, 2, 0])

        transform.set_position(3, 3, 3)

        self.assertEqual(len(calls), 2)

    def test_failing_observer(self):

        def observer(transform):
            raise RuntimeError('observer failed')

        transform = Transform()
        transform.subscribe(observer)

        with self.assertRaises(RuntimeError):
            transform.set_position(1, 2, 3)

        transform.unsubscribe(observer)

        calls = []
        transform.subscribe(calls.append)

        transform.set_position(1, 2, 3)

        self.assertEqual(len(calls), 1)

    def test_tags(self):

        self.transform.tag = 'Plant NoSave'

        self.assertTrue(self.transform.has_tag('Plant'))
        self.assertTrue(self.transform.has_tag('NoSave'))
        self.assertFalse(self.transform.has_tag('Save'))
        self.assertFalse(self.transform.has_tag('plant'))

        self.transform.add_tag('Tree')
        self.transform.add_tag('Plant')

        self.assertEqual(self.transform.tag, 'Plant NoSave Tree')

        self.transform.remove_tag('NoSave')
        self.transform.remove_tag('Missing')

        self.assertEqual(self.transform.tag, 'Plant Tree')

        with self.assertRaises(ValueError):
            self.transform.add_tag('Two Words')

        with self.assertRaises(ValueError):
            self.transform.add_tag('')

        self.assertEqual(self.notifications, [])

    def test_str(self):

        text = str(self.transform)

        self.assertTrue(text.startswith('Transform('))

        self.assertIn('position=', text)

        self.assertNotIn('_observers', text)

        self.assertIn('rotation=Quat(', repr(self.transform))
