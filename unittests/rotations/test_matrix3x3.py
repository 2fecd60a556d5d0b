import logging

from unittest import TestCase

import numpy as np

from gimbal.rotations import Matrix3x3, DegenerateRotationError


class TestMatrix3x3(TestCase):

    def setUp(self):

        self.matrix = Matrix3x3(1, 2, 3, 0, 1, 4, 5, 6, 0)

    def test_init(self):

        np.testing.assert_array_equal(Matrix3x3().as_array(), np.eye(3))

        np.testing.assert_array_equal(self.matrix.as_array(), [[1, 2, 3], [0, 1, 4], [5, 6, 0]])

        np.testing.assert_array_equal(Matrix3x3.identity().as_array(), np.eye(3))

    def test_from_array(self):

        self.assertEqual(Matrix3x3.from_array([1, 2, 3, 0, 1, 4, 5, 6, 0]), self.matrix)

        self.assertEqual(Matrix3x3.from_array([[1, 2, 3], [0, 1, 4], [5, 6, 0]]), self.matrix)

        with self.assertRaises(ValueError):
            Matrix3x3.from_array([1, 2, 3])

        with self.assertRaises(ValueError):
            Matrix3x3.from_array(np.eye(4))

    def test_as_array_copy(self):

        array = self.matrix.as_array()
        array[0, 0] = 100

        self.assertEqual(self.matrix[0, 0], 1)

    def test_indexing(self):

        self.assertEqual(self.matrix[2, 1], 6)
        self.assertEqual(self.matrix[1][2], 4)

        self.matrix[2, 1] = -7

        self.assertEqual(self.matrix[2, 1], -7)

    def test_mul_matrix(self):

        other = Matrix3x3(2, -1, 0, 1, 3, 2, 0, 1, 1)

        expected = self.matrix.as_array() @ other.as_array()

        np.testing.assert_allclose((self.matrix * other).as_array(), expected)

        np.testing.assert_allclose((self.matrix @ other).as_array(), expected)

        self.assertNotEqual(self.matrix * other, other * self.matrix)

        self.assertEqual(Matrix3x3() * self.matrix, self.matrix)

    def test_imul(self):

        other = Matrix3x3(2, -1, 0, 1, 3, 2, 0, 1, 1)

        expected = self.matrix * other

        matrix = self.matrix
        matrix *= other

        self.assertIs(matrix, self.matrix)

        self.assertEqual(matrix, expected)

    def test_mul_vector(self):

        np.testing.assert_array_equal(Matrix3x3() * [1, 2, 3], [1, 2, 3])

        # the columns of the matrix are used
        np.testing.assert_array_equal(self.matrix * [1, 0, 0], [1, 2, 3])

        np.testing.assert_allclose(self.matrix * np.array([1, -2, 0.5]),
                                   self.matrix.as_array().T @ [1, -2, 0.5])

    def test_mul_scalar(self):

        np.testing.assert_array_equal((self.matrix * 2).as_array(), self.matrix.as_array() * 2)

        self.assertEqual(2 * self.matrix, self.matrix * 2)

        self.assertEqual(0.5 * self.matrix, Matrix3x3.from_array(self.matrix.as_array() * 0.5))

    def test_mul_bad_type(self):

        with self.assertRaises(TypeError):
            _ = self.matrix * 'abc'

        with self.assertRaises(TypeError):
            _ = self.matrix * [1, 2]

        with self.assertRaises(TypeError):
            _ = 'abc' * self.matrix

    def test_add_sub(self):

        other = Matrix3x3(2, -1, 0, 1, 3, 2, 0, 1, 1)

        np.testing.assert_array_equal((self.matrix + other).as_array(), self.matrix.as_array() + other.as_array())

        np.testing.assert_array_equal((self.matrix - other).as_array(), self.matrix.as_array() - other.as_array())

        matrix = Matrix3x3()
        matrix += other
        matrix -= Matrix3x3()

        np.testing.assert_array_equal(matrix.as_array(), other.as_array())

    def test_determinant(self):

        self.assertEqual(Matrix3x3().determinant(), 1.0)

        self.assertAlmostEqual(self.matrix.determinant(), 1.0)

        self.assertEqual(Matrix3x3(1, 2, 3, 2, 4, 6, 0, 0, 1).determinant(), 0.0)

    def test_inverse(self):

        self.assertTrue(self.matrix.inverse().equals(Matrix3x3(-24, 18, 5, 20, -15, -4, -5, 4, 1)))

        self.assertTrue((self.matrix * self.matrix.inverse()).equals(Matrix3x3()))

        other = Matrix3x3(2, -1, 0, 1, 3, 2, 0, 1, 1)

        self.assertTrue(other.get_inverse().get_inverse().equals(other))

    def test_inverse_singular(self):

        singular = Matrix3x3(1, 2, 3, 2, 4, 6, 0, 0, 1)

        with self.assertLogs('gimbal.rotations.core.matrix_math', level=logging.DEBUG):
            inverse = singular.inverse()

        self.assertEqual(inverse, singular)

        self.assertIsNot(inverse, singular)

        with self.assertRaises(DegenerateRotationError) as context:
            singular.inverse(strict=True)

        self.assertIsInstance(context.exception.fallback, Matrix3x3)
        self.assertEqual(context.exception.fallback, singular)

    def test_transpose(self):

        np.testing.assert_array_equal(self.matrix.transpose().as_array(), self.matrix.as_array().T)

        self.assertEqual(self.matrix.get_transpose().get_transpose(), self.matrix)

    def test_2d_helpers(self):

        np.testing.assert_array_equal((Matrix3x3.translate_2d(2, 3) * Matrix3x3()).as_array(),
                                      [[1, 0, 2], [0, 1, 3], [0, 0, 1]])

        np.testing.assert_array_equal(Matrix3x3.scale_2d(2, 3).as_array(), np.diag([2, 3, 1]))

        self.assertTrue(Matrix3x3.rotation_2d_deg(90).equals(Matrix3x3(0, -1, 0, 1, 0, 0, 0, 0, 1)))

        self.assertTrue(Matrix3x3.rotation_2d_rad(np.pi).equals(Matrix3x3(-1, 0, 0, 0, -1, 0, 0, 0, 1)))

    def test_eq(self):

        self.assertEqual(self.matrix, Matrix3x3(1, 2, 3, 0, 1, 4, 5, 6, 0))

        self.assertNotEqual(self.matrix, Matrix3x3(1, 2, 3, 0, 1, 4, 5, 6, 1e-9))

        self.assertNotEqual(self.matrix, 'matrix')

    def test_equals(self):

        self.assertTrue(self.matrix.equals(Matrix3x3(1, 2, 3, 0, 1, 4, 5, 6, 1e-5)))

        self.assertFalse(self.matrix.equals(Matrix3x3(1, 2, 3, 0, 1, 4, 5, 6, 1e-3)))

        self.assertTrue(self.matrix.equals(Matrix3x3(1, 2, 3, 0, 1, 4, 5, 6, 1e-3), tolerance=1e-2))

    def test_to_string(self):

        self.assertEqual(Matrix3x3().to_string(), '[1 0 0] [0 1 0] [0 0 1]')

        self.assertEqual(str(Matrix3x3(1.5, 0, 0, 0, 1, 0, 0, 0, -2)), '[1.5 0 0] [0 1 0] [0 0 -2]')

    def test_repr(self):

        self.assertEqual(repr(Matrix3x3()), 'Matrix3x3(1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0)')
