import unittest
import numpy as np
import numpy.testing as npt

from vdspiral import design, traj

if __name__ == '__main__':
    unittest.main()


class TestCalcTraj(unittest.TestCase):

    Tg = 4e-6
    nint = 16
    krmax = 5

    def setUp(self):
        self.g, _ = design.calc_vds(15000, 4, self.Tg, self.Tg, self.nint,
                                    [24], self.krmax, 50000)

    def test_shape(self):
        k, w = traj.calc_traj(self.g, self.nint, self.Tg, self.krmax)

        n = len(self.g)
        self.assertEqual(k.shape, (self.nint * n, 2))
        self.assertEqual(w.shape, (self.nint * n, ))

    def test_normalized(self):
        k, _ = traj.calc_traj(self.g, self.nint, self.Tg, self.krmax)
        kabs = np.linalg.norm(k, axis=-1)

        self.assertTrue(np.all(kabs <= 1 + 1e-9))

        n = len(self.g)
        npt.assert_allclose(k[0], [0, 0])
        self.assertGreater(kabs[n - 1], 0.99)

    def test_interleaves_start_at_origin(self):
        k, _ = traj.calc_traj(self.g, self.nint, self.Tg, self.krmax)
        k = k.reshape((self.nint, len(self.g), 2))

        npt.assert_allclose(k[:, 0], 0)
        npt.assert_allclose(np.linalg.norm(k, axis=-1),
                            np.linalg.norm(k[:1], axis=-1).repeat(
                                self.nint, axis=0), atol=1e-12)

    def test_point_symmetry(self):
        k, _ = traj.calc_traj(self.g, self.nint, self.Tg, self.krmax)
        k = k.reshape((self.nint, len(self.g), 2))

        half = self.nint // 2
        for i in range(half):
            npt.assert_allclose(k[i], -k[i + half], atol=1e-12)

    def test_weights(self):
        _, w = traj.calc_traj(self.g, self.nint, self.Tg, self.krmax)
        w = w.reshape((self.nint, len(self.g)))

        self.assertTrue(np.all(w >= 0))
        self.assertTrue(np.all(w <= np.linalg.norm(self.g, axis=-1)))
        for i in range(1, self.nint):
            npt.assert_allclose(w[i], w[0])

    def test_integrated_gradient(self):
        k, _ = traj.calc_traj(self.g, 1, self.Tg, self.krmax)

        kint = np.cumsum(self.g[:-1], axis=0) * 4258.0 * self.Tg
        npt.assert_allclose(k[1:] * self.krmax, kint, atol=1e-12)

    def test_small(self):
        g = np.array([[0, 1], [1, 0], [1, 1]])
        k, w = traj.calc_traj(g, 1, 1, 1, gamma=1)

        npt.assert_allclose(k, [[0, 0], [0, 1], [1, 1]])
        npt.assert_allclose(w, [0, 1, 0], atol=1e-12)

    def test_rotation(self):
        g = np.array([[1, 0], [0, 0]])
        k, _ = traj.calc_traj(g, 4, 1, 1, gamma=1)
        k = k.reshape((4, 2, 2))

        npt.assert_allclose(k[:, 1], [[1, 0], [0, -1], [-1, 0], [0, 1]],
                            atol=1e-12)

    def test_krmax_scaling(self):
        k1, w1 = traj.calc_traj(self.g, 2, self.Tg, self.krmax)
        k2, w2 = traj.calc_traj(self.g, 2, self.Tg, 2 * self.krmax)

        npt.assert_allclose(k1, 2 * k2)
        npt.assert_allclose(w1, w2)

    def test_pbar(self):
        k1, w1 = traj.calc_traj(self.g, 4, self.Tg, self.krmax,
                                show_pbar=True)
        k2, w2 = traj.calc_traj(self.g, 4, self.Tg, self.krmax)

        npt.assert_allclose(k1, k2)
        npt.assert_allclose(w1, w2)

    def test_invalid(self):
        with self.assertRaises(ValueError):
            traj.calc_traj(self.g[:, 0], self.nint, self.Tg, self.krmax)

        with self.assertRaises(ValueError):
            traj.calc_traj(self.g, 0, self.Tg, self.krmax)

        with self.assertRaises(ValueError):
            traj.calc_traj(self.g, self.nint, 0, self.krmax)

        with self.assertRaises(ValueError):
            traj.calc_traj(self.g, self.nint, self.Tg, -1)


class TestInterpTraj(unittest.TestCase):

    def test_linear(self):
        t = np.arange(11)
        k = np.stack((t, 2 * t), axis=-1).astype(np.float64)

        kd = traj.interp_traj(k, 1, 2.5)

        npt.assert_allclose(kd, [[0, 0], [2.5, 5], [5, 10], [7.5, 15],
                                 [10, 20]], atol=1e-9)

    def test_nsamples(self):
        t = np.arange(11)
        k = np.stack((t, t**2), axis=-1).astype(np.float64)

        kd = traj.interp_traj(k, 1, 0.5, nsamples=4)

        npt.assert_allclose(kd, [[0, 0], [0.5, 0.25], [1, 1], [1.5, 2.25]],
                            atol=1e-9)

    def test_interleaves(self):
        g, _ = design.calc_vds(15000, 4, 1e-6, 4e-6, 16, [24], 5, 200000)
        k, _ = traj.calc_traj(g, 4, 1e-6, 5)
        k = k.reshape((4, len(g), 2))

        kd = traj.interp_traj(k, 1e-6, 4e-6)

        self.assertEqual(kd.shape[0], 4)
        self.assertEqual(kd.shape[-1], 2)
        npt.assert_allclose(kd[:, 1], k[:, 4], atol=1e-12)
        npt.assert_allclose(kd[:, 0], 0, atol=1e-12)

    def test_invalid(self):
        with self.assertRaises(ValueError):
            traj.interp_traj(np.zeros(5), 1, 1)

        with self.assertRaises(ValueError):
            traj.interp_traj(np.zeros((1, 2)), 1, 1)

        with self.assertRaises(ValueError):
            traj.interp_traj(np.zeros((5, 2)), 1, 0)
