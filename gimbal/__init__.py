# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


"""
gimbal: rotation value types for 3D applications

The :mod:`gimbal.rotations` package provides euler angle, quaternion and 3x3 matrix rotation types, the conversions
between them and a transform that keeps a cached model matrix in sync with its rotation.
"""

__version__ = '1.0.0'
