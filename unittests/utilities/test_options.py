from dataclasses import dataclass

from unittest import TestCase

from gimbal.utilities.options import UserOptions
from gimbal.utilities.mixin_classes import AttributePrinting, UserOptionConfigured


@dataclass
class ExampleOptions(UserOptions):
    tolerance: float = 1e-4
    label: str = 'example'


class Example(UserOptionConfigured[ExampleOptions], ExampleOptions):

    def __init__(self, options: ExampleOptions | None = None):
        super().__init__(ExampleOptions, options=options)


class TestUserOptions(TestCase):

    def test_options_dict(self):

        self.assertEqual(ExampleOptions().options_dict, {'tolerance': 1e-4, 'label': 'example'})

    def test_apply_options(self):

        class Target:
            pass

        target = Target()

        ExampleOptions(label='other').apply_options(target)

        self.assertEqual(target.tolerance, 1e-4)
        self.assertEqual(target.label, 'other')


class TestUserOptionConfigured(TestCase):

    def test_defaults(self):

        example = Example()

        self.assertEqual(example.tolerance, 1e-4)
        self.assertEqual(example.label, 'example')

        self.assertIsInstance(example.original_options, ExampleOptions)

    def test_reset_settings(self):

        options = ExampleOptions(tolerance=0.5)

        example = Example(options)

        self.assertEqual(example.tolerance, 0.5)

        example.tolerance = 3
        example.label = 'changed'

        example.reset_settings()

        self.assertEqual(example.tolerance, 0.5)
        self.assertEqual(example.label, 'example')

        self.assertIs(example.original_options, options)

    def test_original_options_setter(self):

        example = Example()

        example.original_options = ExampleOptions(label='new')

        example.reset_settings()

        self.assertEqual(example.label, 'new')


class TestAttributePrinting(TestCase):

    def test_str_repr(self):

        class Printable(AttributePrinting):

            def __init__(self):
                self.value = 1.5
                self.name = 'text'
                self._hidden = 3
                self._shown = 4

            @property
            def shown(self):
                return self._shown

        printable = Printable()

        self.assertEqual(str(printable), 'Printable(value=1.5, name=text, shown=4)')

        self.assertEqual(repr(printable), "Printable(value=1.5, name='text', shown=4)")
