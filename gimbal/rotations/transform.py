# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.

"""
This module provides the :class:`Transform` class, which owns a position, a rotation and a scale and keeps the derived
4x4 model matrix of the three in sync.

The rotation of a transform can be read and written either as a :class:`.Quat` (:attr:`.Transform.rotation`) or as
a :class:`.Rotator` (:attr:`.Transform.rotator`).  The quaternion is the canonical representation.  The rotator and the
model matrix are derived from it lazily and cached until the next write.  Every write notifies the callables subscribed
to the transform::

    >>> from gimbal.rotations import Transform, Rotator
    >>> changes = []
    >>> transform = Transform()
    >>> transform.subscribe(changes.append)
    >>> transform.rotator = Rotator(0, 90, 0)
    >>> transform.set_position(1, 2, 3)
    >>> len(changes)
    2
    >>> transform.model_matrix[:3, 3]
    array([1., 2., 3.])
"""

import logging

from dataclasses import dataclass

from typing import Callable, Optional

import numpy as np

from gimbal._typing import ARRAY_LIKE, DOUBLE_ARRAY
from gimbal.rotations.core._helpers import _check_vector_array_and_shape
from gimbal.rotations.core.elementals import translate_4x4, scale_4x4, rotation_4x4
from gimbal.rotations.core.matrix_math import matrix_transpose
from gimbal.rotations.matrix3x3 import Matrix3x3
from gimbal.rotations.quat import Quat
from gimbal.rotations.rotator import Rotator
from gimbal.utilities.mixin_classes import AttributePrinting, UserOptionConfigured
from gimbal.utilities.options import UserOptions


__all__ = ['TransformOptions', 'Transform', 'TransformObserver']


_LOGGER: logging.Logger = logging.getLogger(__name__)
"""
The logging interface for reporting observer activity.
"""


TransformObserver = Callable[['Transform'], None]
"""
The signature of the callables that can be subscribed to a :class:`Transform`.
"""


@dataclass
class TransformOptions(UserOptions):
    """
    The initial state of a :class:`Transform`.

    :meth:`.Transform.reset_settings` returns a transform to this state.
    """

    initial_position: ARRAY_LIKE = (0.0, 0.0, 0.0)
    """
    The starting position of the transform.
    """

    initial_scale: ARRAY_LIKE = (1.0, 1.0, 1.0)
    """
    The starting per axis scale of the transform.
    """

    initial_rotation: ARRAY_LIKE = (0.0, 0.0, 0.0)
    """
    The starting rotation of the transform as ``(pitch, yaw, roll)`` in degrees.
    """

    initial_tag: str = ''
    """
    The starting whitespace delimited tags of the transform.
    """


class Transform(UserOptionConfigured[TransformOptions], AttributePrinting):
    """
    A position, rotation and scale with a cached model matrix and change notification.

    The model matrix is

    .. math::
        \\mathbf{M} = \\mathbf{T}(\\mathbf{M}_R\\mathbf{S})

    where :math:`\\mathbf{T}` is the translation, :math:`\\mathbf{M}_R` the rotation of the canonical quaternion and
    :math:`\\mathbf{S}` the scale, all as 4x4 affine matrices.

    Exactly one representation of the rotation is written per update.  Writing :attr:`rotation` stores the quaternion
    and invalidates the cached rotator.  Writing :attr:`rotator` stores the quaternion converted from it and caches the
    written rotator as given, so reading it back returns the same angles rather than an equivalent set.  Neither write
    feeds back into the representation it came from.

    Observers are plain callables taking the transform.  They are called once per write, in the order they subscribed.
    A write made by an observer while it is being notified updates the transform but does not start a nested round of
    notifications.

    Tags are whitespace delimited tokens stored in :attr:`tag`.  Changing the tags does not notify observers.
    """

    def __init__(self, options: Optional[TransformOptions] = None):
        """
        :param options: the initial state of the transform
        """

        self._observers: list[TransformObserver] = []
        """
        The subscribed callables in subscription order
        """

        self._notifying: bool = False
        """
        Whether observers are currently being notified
        """

        self._position: DOUBLE_ARRAY = np.zeros(3)
        self._scale: DOUBLE_ARRAY = np.ones(3)
        self._rotation: Quat = Quat()
        self._tag: str = ''

        self._rotator: Optional[Rotator] = None
        """
        The cached rotator, or ``None`` when it needs to be derived from the quaternion
        """

        self._model_matrix: Optional[DOUBLE_ARRAY] = None
        """
        The cached model matrix, or ``None`` when it needs to be recomputed
        """

        super().__init__(TransformOptions, options=options)

        self._load_initial_state()

    def _load_initial_state(self) -> None:
        """
        Sets the state of the transform from the initial values without notifying.
        """

        self._position = _check_vector_array_and_shape(self.initial_position, return_copy=True)
        self._scale = _check_vector_array_and_shape(self.initial_scale, return_copy=True)

        rotator = Rotator.make_from_euler(self.initial_rotation)
        self._rotation = rotator.quaternion()
        self._rotator = rotator

        self._tag = str(self.initial_tag)

        self._model_matrix = None

    def reset_settings(self) -> None:
        """
        Returns the transform to the state it was created with and notifies observers.

        Subscriptions are not changed.
        """

        super().reset_settings()

        self._load_initial_state()

        self.notify()

    # ----------------------------------------------------------------------------------------------------------------
    # observers

    def subscribe(self, observer: TransformObserver) -> None:
        """
        Registers a callable to be called with this transform after every write.

        Subscribing the same callable twice has no effect.

        :param observer: the callable to register
        """

        if observer not in self._observers:
            self._observers.append(observer)

    def unsubscribe(self, observer: TransformObserver) -> None:
        """
        Removes a previously subscribed callable.  Unknown callables are ignored.

        :param observer: the callable to remove
        """

        if observer in self._observers:
            self._observers.remove(observer)

    def notify(self) -> None:
        """
        Calls every subscribed callable with this transform.

        Calls made while a notification is already in progress return immediately.
        """

        if self._notifying:
            _LOGGER.debug('Transform written during notification, skipping nested notification')
            return

        self._notifying = True
        try:
            for observer in list(self._observers):
                observer(self)
        finally:
            self._notifying = False

    def _changed(self, rotation_changed: bool = False) -> None:

        if rotation_changed:
            self._rotator = None

        self._model_matrix = None

        self.notify()

    # ----------------------------------------------------------------------------------------------------------------
    # rotation

    @property
    def rotation(self) -> Quat:
        """
        The canonical rotation of the transform as a :class:`.Quat`.

        A copy is returned, so modifying it in place does not change the transform.  Assign to this property instead.
        """

        return self._rotation.copy()

    @rotation.setter
    def rotation(self, value: Quat):

        if not isinstance(value, Quat):
            raise TypeError(f'rotation must be a Quat, not {type(value).__name__}')

        self._rotation = value.copy()

        self._changed(rotation_changed=True)

    @property
    def rotator(self) -> Rotator:
        """
        The rotation of the transform as a :class:`.Rotator`.

        Derived from :attr:`rotation` when needed.  A copy is returned, so assign to this property to change it.
        """

        if self._rotator is None:
            self._rotator = self._rotation.get_rotator()

        return self._rotator.copy()

    @rotator.setter
    def rotator(self, value: Rotator):

        if not isinstance(value, Rotator):
            raise TypeError(f'rotator must be a Rotator, not {type(value).__name__}')

        self._rotation = value.quaternion()
        self._rotator = value.copy()

        self._changed()

    def rotate(self, other: Quat | Rotator) -> None:
        """
        Applies an additional rotation after the current one.

        The canonical quaternion becomes ``other * rotation``.

        :param other: the rotation to apply
        """

        if isinstance(other, Rotator):
            other = other.quaternion()

        elif not isinstance(other, Quat):
            raise TypeError(f'can only rotate by a Quat or Rotator, not {type(other).__name__}')

        self._rotation = other * self._rotation

        self._changed(rotation_changed=True)

    def rotate_vector(self, vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
        """
        :param vector: the vector to rotate
        :return: ``vector`` rotated by :attr:`rotation`
        """

        return self._rotation.rotate_vector(vector)

    def unrotate_vector(self, vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
        """
        :param vector: the vector to rotate
        :return: ``vector`` rotated by the inverse of :attr:`rotation`
        """

        return self._rotation.unrotate_vector(vector)

    @property
    def rotation_matrix(self) -> Matrix3x3:
        """
        The 3x3 rotation matrix of :attr:`rotation`.
        """

        return self._rotation.matrix()

    # ----------------------------------------------------------------------------------------------------------------
    # position and scale

    @property
    def position(self) -> DOUBLE_ARRAY:
        """
        The position of the transform as a length 3 numpy array (a copy).
        """

        return self._position.copy()

    @position.setter
    def position(self, value: ARRAY_LIKE):

        self._position = _check_vector_array_and_shape(value, return_copy=True)

        self._changed()

    def set_position(self, x: float, y: float, z: float) -> None:
        """
        :param x: the new x position
        :param y: the new y position
        :param z: the new z position
        """

        self.position = [x, y, z]

    @property
    def scale(self) -> DOUBLE_ARRAY:
        """
        The per axis scale of the transform as a length 3 numpy array (a copy).
        """

        return self._scale.copy()

    @scale.setter
    def scale(self, value: ARRAY_LIKE):

        self._scale = _check_vector_array_and_shape(value, return_copy=True)

        self._changed()

    def set_scale(self, x: float, y: Optional[float] = None, z: Optional[float] = None) -> None:
        """
        Sets the scale either per axis or, when only ``x`` is given, uniformly.

        :param x: the x scale, or the uniform scale
        :param y: the y scale
        :param z: the z scale
        """

        if y is None and z is None:
            self.scale = [x, x, x]

        elif y is None or z is None:
            raise ValueError('set_scale takes either 1 uniform scale or all 3 axis scales')

        else:
            self.scale = [x, y, z]

    # ----------------------------------------------------------------------------------------------------------------
    # model matrix

    @property
    def model_matrix(self) -> DOUBLE_ARRAY:
        """
        The 4x4 model matrix, translation applied after rotation applied after scale.

        The rotation block is the transpose of :attr:`rotation_matrix`, so ``model_matrix[:3, :3] @ v`` gives the same
        result as ``rotation_matrix * v`` (see :class:`.Matrix3x3`).  It is derived from the canonical quaternion only,
        so transforms with equal :attr:`rotation` have equal model matrices whatever rotator was written.

        This is recomputed on first access after a write.
        """

        if self._model_matrix is None:
            rotation = matrix_transpose(self._rotation.matrix().as_array())
            self._model_matrix = translate_4x4(self._position) @ (rotation_4x4(rotation) @ scale_4x4(self._scale))

        return self._model_matrix.copy()

    # ----------------------------------------------------------------------------------------------------------------
    # tags

    @property
    def tag(self) -> str:
        """
        The whitespace delimited tags of the transform.
        """

        return self._tag

    @tag.setter
    def tag(self, value: str):
        self._tag = str(value)

    def has_tag(self, tag: str) -> bool:
        """
        :param tag: the tag to look for (case sensitive)
        :return: whether ``tag`` is one of the tokens of :attr:`tag`
        """

        return tag in self._tag.split()

    def add_tag(self, tag: str) -> None:
        """
        Adds a tag if it is not already present.

        :param tag: the tag to add
        :raises ValueError: if the tag is empty or contains whitespace
        """

        tag = self._check_tag(tag)

        if not self.has_tag(tag):
            self._tag = ' '.join(self._tag.split() + [tag])

    def remove_tag(self, tag: str) -> None:
        """
        Removes every occurrence of a tag.  Missing tags are ignored.

        :param tag: the tag to remove
        """

        self._tag = ' '.join(token for token in self._tag.split() if token != tag)

    @staticmethod
    def _check_tag(tag: str) -> str:

        if not tag or len(tag.split()) != 1 or tag.split()[0] != tag:
            raise ValueError(f'tags must be a single non-empty token without whitespace, got {tag!r}')

        return tag
