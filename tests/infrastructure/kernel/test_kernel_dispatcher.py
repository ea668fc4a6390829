import unittest
import warnings

import numpy as np

from kernelnet.domain._device import Device
from kernelnet.domain._errors import DeviceNotSupportedError, ShapeMismatchError
from kernelnet.infrastructure.kernel import CompiledKernel, KernelDispatcher, Thread
from kernelnet.infrastructure.kernel._cpu_backend import spans


def double(v):
    return v * 2.0


def scale_2d(thread, inputs):
    return double(inputs[thread.y][thread.x])


def coords_3d(thread):
    return thread.z * 100 + thread.y * 10 + thread.x


def coords_1d(thread):
    return float(thread.x)


def add_2d(thread, a, b):
    return a[thread.y][thread.x] + b[thread.y][thread.x]


def failing(thread, inputs):
    if thread.y == 2:
        raise ZeroDivisionError("boom")
    return inputs[thread.y][thread.x]


class TestCompile(unittest.TestCase):
    def test_compiled_kernel_keeps_introspection_data(self):
        k = KernelDispatcher().compile(scale_2d, output=[4, 3], functions=[double])
        self.assertIsInstance(k, CompiledKernel)
        self.assertIs(k.program, scale_2d)
        self.assertIn("def scale_2d(thread, inputs):", k.source)
        self.assertEqual(k.output, [4, 3])
        self.assertEqual(k.array_shape, (3, 4))
        self.assertEqual([f.name for f in k.functions], ["double"])
        self.assertIs(k.functions[0].fn, double)
        self.assertTrue(k.functions[0].source.startswith("def double(v):"))
        self.assertEqual(k.device, Device("cpu"))

    def test_functions_are_linked_by_name(self):
        def double(v):  # noqa: F811
            return v + 1.0

        k = KernelDispatcher().compile(scale_2d, output=[2, 1], functions=[double])
        np.testing.assert_allclose(k([[1.0, 2.0]]), [[2.0, 3.0]])

    def test_linking_does_not_touch_the_original_program(self):
        def double(v):  # noqa: F811
            return 0.0

        KernelDispatcher().compile(scale_2d, output=[1, 1], functions=[double])
        self.assertEqual(scale_2d(Thread(0, 0), [[1.5]]), 3.0)

    def test_invalid_output_raises(self):
        d = KernelDispatcher()
        for bad in ([], [1, 2, 3, 4], [0, 1], [2, -1], [2.0, 3]):
            with self.subTest(bad=bad):
                with self.assertRaises(ValueError):
                    d.compile(coords_1d, output=bad)

    def test_anonymous_function_rejected(self):
        with self.assertRaises(ValueError):
            KernelDispatcher().compile(scale_2d, output=[1, 1], functions=[lambda v: v])

    def test_duplicate_function_name_rejected(self):
        with self.assertRaises(ValueError):
            KernelDispatcher().compile(scale_2d, output=[1, 1], functions=[double, double])

    def test_invalid_max_workers(self):
        for bad in (0, -2, 1.5, True):
            with self.subTest(bad=bad):
                with self.assertRaises(ValueError):
                    KernelDispatcher(max_workers=bad)


class TestExecution(unittest.TestCase):
    def test_every_cell_is_evaluated_rank3(self):
        k = KernelDispatcher().compile(coords_3d, output=[3, 2, 2])
        out = k()
        self.assertEqual(out.shape, (2, 2, 3))
        expected = np.array(
            [[[z * 100 + y * 10 + x for x in range(3)] for y in range(2)] for z in range(2)],
            dtype=np.float64,
        )
        np.testing.assert_array_equal(out, expected)

    def test_rank1(self):
        out = KernelDispatcher().compile(coords_1d, output=[5])()
        np.testing.assert_array_equal(out, [0.0, 1.0, 2.0, 3.0, 4.0])

    def test_two_inputs(self):
        k = KernelDispatcher().compile(add_2d, output=[2, 2])
        out = k([[1, 2], [3, 4]], np.ones((2, 2)))
        np.testing.assert_array_equal(out, [[2, 3], [4, 5]])
        self.assertEqual(out.dtype, np.float64)

    def test_threaded_matches_serial(self):
        rng = np.random.default_rng(1)
        x = rng.normal(size=(7, 5))
        serial = KernelDispatcher().compile(scale_2d, output=[5, 7], functions=[double])
        threaded = KernelDispatcher(max_workers=3).compile(
            scale_2d, output=[5, 7], functions=[double]
        )
        np.testing.assert_array_equal(serial(x), threaded(x))
        np.testing.assert_allclose(threaded(x), 2.0 * x)

    def test_input_is_not_mutated(self):
        x = np.arange(6, dtype=np.float64).reshape(2, 3)
        before = x.copy()
        out = KernelDispatcher().compile(scale_2d, output=[3, 2], functions=[double])(x)
        np.testing.assert_array_equal(x, before)
        self.assertIsNot(out, x)

    def test_program_errors_propagate(self):
        for workers in (1, 2):
            k = KernelDispatcher(max_workers=workers).compile(failing, output=[2, 3])
            with self.assertRaises(ZeroDivisionError):
                k(np.zeros((3, 2)))


class TestShapeValidation(unittest.TestCase):
    def setUp(self):
        self.kernel = KernelDispatcher().compile(scale_2d, output=[4, 3], functions=[double])

    def test_wrong_shape_raises(self):
        with self.assertRaises(ShapeMismatchError) as cm:
            self.kernel(np.zeros((4, 3)))
        self.assertEqual(cm.exception.expected, (3, 4))
        self.assertEqual(cm.exception.actual, (4, 3))

    def test_wrong_rank_raises(self):
        with self.assertRaises(ShapeMismatchError):
            self.kernel(np.zeros((1, 3, 4)))

    def test_jagged_input_raises(self):
        with self.assertRaises(ShapeMismatchError) as cm:
            self.kernel([[1, 2, 3, 4], [1, 2], [1, 2, 3, 4]])
        self.assertIsNone(cm.exception.actual)

    def test_wrong_argument_count_raises(self):
        with self.assertRaises(TypeError):
            self.kernel(np.zeros((3, 4)), np.zeros((3, 4)))


class TestDeviceSelection(unittest.TestCase):
    def test_cuda_falls_back_with_warning(self):
        d = KernelDispatcher("cuda:0")
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            k = d.compile(scale_2d, output=[1, 1], functions=[double])
        self.assertTrue(any(issubclass(w.category, RuntimeWarning) for w in caught))
        self.assertEqual(k.device, Device("cpu"))
        np.testing.assert_allclose(k([[2.0]]), [[4.0]])

    def test_cuda_without_fallback_raises(self):
        d = KernelDispatcher(Device("cuda:0"), fallback=False)
        with self.assertRaises(DeviceNotSupportedError) as cm:
            d.compile(scale_2d, output=[1, 1], functions=[double])
        self.assertEqual(cm.exception.device, "cuda:0")


class TestSpans(unittest.TestCase):
    def test_spans_cover_range_without_overlap(self):
        for extent in (1, 2, 7, 10):
            for parts in (1, 3, 4, 20):
                with self.subTest(extent=extent, parts=parts):
                    result = spans(extent, parts)
                    self.assertLessEqual(len(result), min(extent, parts))
                    covered = [i for a, b in result for i in range(a, b)]
                    self.assertEqual(covered, list(range(extent)))


if __name__ == "__main__":
    unittest.main()
