from unittest import TestCase

import warnings

import numpy as np

from scipy.spatial.transform import Rotation as ScipyRotation

import quatkit as qk


SQRT2_2 = np.sqrt(2) / 2


def random_unit_quaternions(count, seed=0):
    rng = np.random.default_rng(seed)
    quaternions = rng.normal(size=(count, 4))
    return quaternions / np.linalg.norm(quaternions, axis=1, keepdims=True)


class TestAngleAxisToQuaternion(TestCase):

    def test_angle_axis_to_quaternion(self):

        q = qk.angle_axis_to_quaternion(np.pi / 2, [0, 0, 1])

        np.testing.assert_array_almost_equal(q, [0, 0, -0.70710678, 0.70710678])
        self.assertEqual(q.dtype, np.float32)
        self.assertEqual(q.shape, (4,))

        # the magnitude of the axis doesn't matter
        q = qk.angle_axis_to_quaternion(np.pi / 2, [0, 0, 5])

        np.testing.assert_array_almost_equal(q, [0, 0, -0.70710678, 0.70710678])

        q = qk.angle_axis_to_quaternion(np.pi, [1, 0, 0])

        np.testing.assert_array_almost_equal(q, [-1, 0, 0, 0])

        q = qk.angle_axis_to_quaternion(0, [0, 1, 0])

        np.testing.assert_array_equal(q, [0, 0, 0, 1])

        q = qk.angle_axis_to_quaternion(1, [1, 2, 3])

        np.testing.assert_array_almost_equal(q, np.hstack([-np.array([1, 2, 3]) / np.sqrt(14) * np.sin(0.5),
                                                           np.cos(0.5)]))

    def test_unit_length(self):

        rng = np.random.default_rng(1)

        for angle, axis in zip(rng.uniform(-10, 10, 20), rng.normal(scale=50, size=(20, 3))):

            with self.subTest(angle=angle, axis=axis):
                self.assertAlmostEqual(np.linalg.norm(qk.angle_axis_to_quaternion(angle, axis)), 1, places=6)

    def test_zero_axis(self):

        with warnings.catch_warnings():
            warnings.simplefilter('error')

            q = qk.angle_axis_to_quaternion(1, [0, 0, 0])

        self.assertTrue(np.isnan(q[:3]).all())
        self.assertAlmostEqual(q[3], np.cos(0.5), places=6)


class TestVectorToVectorQuaternion(TestCase):

    def test_coincident(self):

        for vec in ([1, 0, 0], [1, 2, 3], [-0.1, 5, 0.3]):

            with self.subTest(vec=vec):
                np.testing.assert_array_equal(qk.vector_to_vector_quaternion(vec, vec), [0, 0, 0, 1])

                np.testing.assert_array_equal(qk.vector_to_vector_quaternion(vec, 2.5 * np.array(vec)),
                                              [0, 0, 0, 1])

        # within the tolerance
        np.testing.assert_array_equal(qk.vector_to_vector_quaternion([1, 0, 0], [1, 1e-3, 0]), [0, 0, 0, 1])

    def test_opposite(self):

        q = qk.vector_to_vector_quaternion([1, 0, 0], [-1, 0, 0])

        # helper [0, 1, 1], axis [1, 0, 0] x [0, 1, 1] = [0, -1, 1]
        np.testing.assert_array_almost_equal(q, [0, SQRT2_2, -SQRT2_2, 0])

        q = qk.vector_to_vector_quaternion([1, 2, 3], [-1, -2, -3])

        # helper [1, 1, 0], axis [1, 2, 3] x [1, 1, 0] = [-3, 3, -1]
        np.testing.assert_array_almost_equal(q, np.hstack([np.array([3, -3, 1]) / np.sqrt(19), 0]))

        # ties go to the first index
        q = qk.vector_to_vector_quaternion([1, 1, 0], [-2, -2, 0])

        np.testing.assert_array_almost_equal(q, np.hstack([np.array([-1, 1, -1]) / np.sqrt(3), 0]))

        for vec in ([1, 0, 0], [0, -2, 0], [1, 2, 3], [0.3, -4, 2]):

            with self.subTest(vec=vec):
                q = qk.vector_to_vector_quaternion(vec, -np.array(vec))

                angle, _ = qk.quaternion_to_angle_axis(q)

                self.assertAlmostEqual(angle, np.pi, places=5)

                np.testing.assert_allclose(qk.rotate_vector(q, vec), -np.array(vec), atol=1e-5)

    def test_general(self):

        q = qk.vector_to_vector_quaternion([1, 0, 0], [0, 1, 0])

        np.testing.assert_array_almost_equal(q, qk.angle_axis_to_quaternion(np.pi / 2, [0, 0, 1]))

        np.testing.assert_array_almost_equal(qk.rotate_vector(q, [1, 0, 0]), [0, 1, 0])

        rng = np.random.default_rng(2)

        for vec_from, vec_to in zip(rng.normal(size=(20, 3)), rng.normal(scale=3, size=(20, 3))):

            with self.subTest(vec_from=vec_from, vec_to=vec_to):
                q = qk.vector_to_vector_quaternion(vec_from, vec_to)

                self.assertAlmostEqual(np.linalg.norm(q), 1, places=6)

                rotated = qk.rotate_vector(q, vec_from)

                np.testing.assert_allclose(rotated / np.linalg.norm(rotated), vec_to / np.linalg.norm(vec_to),
                                           atol=1e-5)

    def test_epsilon(self):

        q = qk.vector_to_vector_quaternion([1, 0, 0], [1, 1e-3, 0], epsilon=1e-8)

        self.assertGreater(abs(q[2]), 0)

    def test_logging(self):

        with self.assertLogs('quatkit.conversions', level='DEBUG') as logs:
            qk.vector_to_vector_quaternion([0, 0, 1], [0, 0, 1])

        self.assertIn('coincident', logs.output[0])


class TestQuaternionToAngleAxis(TestCase):

    def test_quaternion_to_angle_axis(self):

        angle, axis = qk.quaternion_to_angle_axis([0, 0, -SQRT2_2, SQRT2_2])

        self.assertAlmostEqual(angle, np.pi / 2)
        np.testing.assert_array_almost_equal(axis, [0, 0, -1])
        self.assertIsInstance(angle, float)
        self.assertEqual(axis.dtype, np.float32)

        angle, axis = qk.quaternion_to_angle_axis([-1, 0, 0, 0])

        self.assertAlmostEqual(angle, np.pi)
        np.testing.assert_array_almost_equal(axis, [-1, 0, 0])

        angle, axis = qk.quaternion_to_angle_axis([0, 0, 0, -1])

        self.assertAlmostEqual(angle, 2 * np.pi)

    def test_round_trip(self):

        vec = np.array([1, 2, 3])

        for angle_in in (0.1, 1, 2, 3, np.pi, 4, 5, 6):

            with self.subTest(angle=angle_in):
                angle, axis = qk.quaternion_to_angle_axis(qk.angle_axis_to_quaternion(angle_in, vec))

                self.assertAlmostEqual(angle, angle_in, places=5)

                # the handedness conversion flips the axis
                np.testing.assert_allclose(axis, -vec / np.linalg.norm(vec), atol=1e-6)

    def test_round_trip_any_angle(self):

        vec = np.array([0, 0, 1])

        for angle_in in (-1, -3, -7, 7, 10, -4 * np.pi + 0.5, 20):

            with self.subTest(angle=angle_in):
                quaternion = qk.angle_axis_to_quaternion(angle_in, vec)

                angle, axis = qk.quaternion_to_angle_axis(quaternion)

                self.assertGreaterEqual(angle, 0)
                self.assertLessEqual(angle, 2 * np.pi)

                # the extracted pair rebuilds the same rotation
                rebuilt = qk.angle_axis_to_quaternion(angle, -axis)

                self.assertAlmostEqual(abs(rebuilt @ quaternion), 1, places=6)

                np.testing.assert_allclose(qk.quaternion_to_rotmat(rebuilt), qk.quaternion_to_rotmat(quaternion),
                                           atol=1e-6)

                # the angle agrees modulo 2 pi about the axis line
                signed_angle = angle if axis @ vec < 0 else -angle

                self.assertAlmostEqual(np.cos(signed_angle - angle_in), 1, places=5)

    def test_identity(self):

        with warnings.catch_warnings():
            warnings.simplefilter('error')

            angle, axis = qk.quaternion_to_angle_axis([0, 0, 0, 1])

        self.assertEqual(angle, 0)
        self.assertTrue(np.isnan(axis).all())


class TestQuaternionToRotMat(TestCase):

    def test_quaternion_to_rotmat(self):

        rotmat = qk.quaternion_to_rotmat([0, 0, 0, 1])

        np.testing.assert_array_equal(rotmat, np.eye(4))
        self.assertEqual(rotmat.dtype, np.float32)

        rotmat = qk.quaternion_to_rotmat([SQRT2_2, 0, 0, SQRT2_2])

        np.testing.assert_array_almost_equal(rotmat, [[1, 0, 0, 0], [0, 0, -1, 0], [0, 1, 0, 0], [0, 0, 0, 1]])

        rotmat = qk.quaternion_to_rotmat([0, 1, 0, 0])

        np.testing.assert_array_almost_equal(rotmat[:3, :3], [[-1, 0, 0], [0, 1, 0], [0, 0, -1]])

        rotmat = qk.quaternion_to_rotmat([0, 0, SQRT2_2, SQRT2_2])

        np.testing.assert_array_almost_equal(rotmat[:3, :3], [[0, -1, 0], [1, 0, 0], [0, 0, 1]])

        rotmat = qk.quaternion_to_rotmat([-0.25532186, -0.51064372, -0.76596558, 0.29555113])

        np.testing.assert_array_almost_equal(rotmat[:3, :3], [[-0.69492056, 0.71352099, 0.08929286],
                                                              [-0.19200697, -0.30378504, 0.93319235],
                                                              [0.69297817, 0.6313497, 0.34810748]])

        np.testing.assert_array_equal(rotmat[3], [0, 0, 0, 1])
        np.testing.assert_array_equal(rotmat[:, 3], [0, 0, 0, 1])

    def test_not_normalized(self):

        rotmat = qk.quaternion_to_rotmat([1, 0, 0, 1])

        np.testing.assert_array_almost_equal(rotmat[:3, :3], [[1, 0, 0], [0, -1, -2], [0, 2, -1]])

    def test_against_scipy(self):

        for quaternion in random_unit_quaternions(25):

            with self.subTest(quaternion=quaternion):
                np.testing.assert_allclose(qk.quaternion_to_rotmat(quaternion)[:3, :3],
                                           ScipyRotation.from_quat(quaternion).as_matrix(), atol=1e-6)


class TestRotMatToQuaternion(TestCase):

    def test_rotmat_to_quaternion(self):

        q = qk.rotmat_to_quaternion(np.eye(3))

        np.testing.assert_array_equal(q, [0, 0, 0, 1])
        self.assertEqual(q.dtype, np.float32)

        np.testing.assert_array_equal(qk.rotmat_to_quaternion(np.eye(4)), [0, 0, 0, 1])

        q = qk.rotmat_to_quaternion([[1, 0, 0], [0, 0, -1], [0, 1, 0]])

        np.testing.assert_array_almost_equal(q, [SQRT2_2, 0, 0, SQRT2_2])

        q = qk.rotmat_to_quaternion([[0, 1, 0], [-1, 0, 0], [0, 0, 1]])

        np.testing.assert_array_almost_equal(q, [0, 0, -SQRT2_2, SQRT2_2])

    def test_negative_trace(self):

        np.testing.assert_array_equal(qk.rotmat_to_quaternion(np.diag([1., -1, -1])), [1, 0, 0, 0])

        np.testing.assert_array_equal(qk.rotmat_to_quaternion(np.diag([-1., 1, -1])), [0, 1, 0, 0])

        np.testing.assert_array_equal(qk.rotmat_to_quaternion(np.diag([-1., -1, 1, 1])), [0, 0, 1, 0])

        # zero trace goes through the diagonal branch
        q = qk.rotmat_to_quaternion([[0, 0, 1], [1, 0, 0], [0, 1, 0]])

        np.testing.assert_array_almost_equal(q, [0.5, 0.5, 0.5, 0.5])

        q = qk.rotmat_to_quaternion([[-0.69492056, -0.19200697, 0.69297817],
                                     [0.71352099, -0.30378504, 0.6313497],
                                     [0.08929286, 0.93319235, 0.34810748]])

        np.testing.assert_array_almost_equal(q, [0.25532186, 0.51064372, 0.76596558, 0.29555113])

    def test_round_trip(self):

        for quaternion in random_unit_quaternions(50, seed=3):

            with self.subTest(quaternion=quaternion):
                q = qk.rotmat_to_quaternion(qk.quaternion_to_rotmat(quaternion))

                # double cover
                if q @ quaternion < 0:
                    q = -q

                np.testing.assert_allclose(q, quaternion, atol=1e-5)

    def test_against_scipy(self):

        for quaternion in random_unit_quaternions(25, seed=4):

            with self.subTest(quaternion=quaternion):
                q = qk.rotmat_to_quaternion(ScipyRotation.from_quat(quaternion).as_matrix())

                self.assertAlmostEqual(abs(q @ quaternion), 1, places=5)
