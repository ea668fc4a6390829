import os
import unittest
from unittest import mock

from kernelnet.domain._device import Device
from kernelnet.infrastructure.kernel import (
    KernelDispatcher,
    default_dispatcher,
    get_dispatcher,
    setup,
    teardown,
)


class TestDispatcherSetup(unittest.TestCase):
    def setUp(self):
        teardown()

    def tearDown(self):
        teardown()

    def test_setup_installs_dispatcher(self):
        d = KernelDispatcher(max_workers=2)
        setup(d)
        self.assertIs(get_dispatcher(), d)

    def test_teardown_restores_default(self):
        d = KernelDispatcher(max_workers=2)
        setup(d)
        teardown()
        with mock.patch.dict(os.environ, {}, clear=True):
            fresh = get_dispatcher()
        self.assertIsNot(fresh, d)
        self.assertEqual(fresh.device, Device("cpu"))
        self.assertEqual(fresh.max_workers, 1)

    def test_default_is_cached(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertIs(get_dispatcher(), get_dispatcher())

    def test_environment_configures_default(self):
        env = {"KERNELNET_DEVICE": "cuda:1", "KERNELNET_MAX_WORKERS": "4"}
        with mock.patch.dict(os.environ, env, clear=True):
            d = default_dispatcher()
        self.assertEqual(d.device, Device("cuda:1"))
        self.assertEqual(d.max_workers, 4)

    def test_malformed_environment_raises(self):
        for env in (
            {"KERNELNET_MAX_WORKERS": "many"},
            {"KERNELNET_MAX_WORKERS": "0"},
            {"KERNELNET_DEVICE": "tpu"},
        ):
            with self.subTest(env=env):
                with mock.patch.dict(os.environ, env, clear=True):
                    with self.assertRaises(ValueError):
                        default_dispatcher()


if __name__ == "__main__":
    unittest.main()
