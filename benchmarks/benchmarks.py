import numpy as np
import vdspiral as vd


class DesignSuite:

    def setup(self):
        self.fov = np.array([24.0])
        # compile the kernels outside the timed region
        vd.calc_vds(15000, 4, 4e-6, 4e-6, 16, self.fov, 5, 50000)

    def time_calc_thetadotdot(self):
        vd.calc_thetadotdot(15000, 4, 1.0, 500.0, 4e-6, 4e-6, 16, self.fov)

    def time_calc_vds(self):
        vd.calc_vds(15000, 4, 4e-6, 4e-6, 16, self.fov, 5, 50000)

    def time_calc_vds_variable_density(self):
        fov = vd.fov_coeffs(24, 5, 0.5)
        vd.calc_vds(15000, 4, 4e-6, 4e-6, 16, fov, 5, 50000)

    def time_vds(self):
        vd.vds(15000, 4, 4e-6, 16, self.fov, 5, 200000, oversampling=4)


class TrajSuite:

    def setup(self):
        self.g, _ = vd.calc_vds(15000, 4, 1e-6, 4e-6, 16, [24], 5, 200000)

    def time_calc_traj(self):
        vd.calc_traj(self.g, 16, 1e-6, 5)

    def time_interp_traj(self):
        k, _ = vd.calc_traj(self.g, 1, 1e-6, 5)
        vd.interp_traj(k, 1e-6, 4e-6)
