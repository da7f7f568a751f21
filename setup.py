from setuptools import find_packages, setup

package_name = 'planar_fabrik'

setup(
    name=package_name,
    version='1.0.0',
    packages=find_packages(exclude=['test']),
    python_requires='>=3.8',
    install_requires=['setuptools', 'numpy'],
    zip_safe=True,
    maintainer='yuuki',
    maintainer_email='yuuzena@gmail.com',
    description='Planar FABRIK inverse kinematics solver for fixed-length segment chains',
    license='TODO: License declaration',
    extras_require={
        'test': [
            'pytest',
        ],
    },
)
