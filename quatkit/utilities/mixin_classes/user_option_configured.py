"""
This module provides the :class:`UserOptionConfigured` mixin class that enables classes to be
configured using :class:`.UserOptions`-derived classes while maintaining the ability to reset
to the original configuration state.

Example:
    Basic usage of the UserOptionConfigured mixin::

        from quatkit.utilities.options import UserOptions
        from quatkit.utilities.mixin_classes import UserOptionConfigured
        from dataclasses import dataclass

        @dataclass
        class MyOptions(UserOptions):
            epsilon: float = 1e-5

        class MyUsefulClass(UserOptionConfigured[MyOptions], MyOptions):
            def __init__(self, options: MyOptions = None):
                super().__init__(MyOptions, options=options)

        my_useful_inst = MyUsefulClass()
        my_useful_inst.epsilon = 1e-3  # Make a change
        my_useful_inst.reset_settings()  # Reset to original
        print(my_useful_inst.epsilon)  # Output: 1e-05

.. Note::
    The :class:`UserOptionConfigured` class should come first in the inheritance order
    due to Method Resolution Order (MRO) requirements.
"""

from typing import Generic, TypeVar

from quatkit.utilities.options import UserOptions


OptionsT = TypeVar("OptionsT", bound=UserOptions)
"""
Type variable bound to UserOptions for type safety
"""


class UserOptionConfigured(Generic[OptionsT]):
    """
    Mixin class providing UserOptions-based configuration with reset capability.

    If options are not provided during initialization, default initialization of the options_type class is used.
    The options are stored (not copied) as :attr:`original_options` and reapplied by :meth:`reset_settings`.
    """

    def __init__(self, options_type: type[OptionsT], *args, options: OptionsT | None = None, **kwargs) -> None:
        """
        :param options_type: The type of the :class:`.UserOptions` to use
        :param options: An optional instance of `options_type` preconfigured.
        """

        super().__init__(*args, **kwargs)

        if options is None:
            options = options_type()

        options.apply_options(self)

        self._original_options: OptionsT = options

    def reset_settings(self) -> None:
        """
        Resets the class to the state it was originally initialized with.
        """

        self.original_options.apply_options(self)

    @property
    def original_options(self) -> OptionsT:
        """
        The original configuration options used during initialization.

        .. Warning::
            Modifying the returned object will affect reset behavior.
        """
        return self._original_options
