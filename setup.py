from setuptools import setup, find_packages


setup(name='gimbal',
      version='1.0.0',
      description='Euler angle, quaternion and rotation matrix value types for 3D applications',
      packages=find_packages(include=['gimbal', 'gimbal.*']),
      python_requires='>=3.11',
      install_requires=['numpy'],
      extras_require={'test': ['pytest', 'scipy']})
