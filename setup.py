import setuptools

TESTS_REQUIRES = [
    'pytest',
    'pytest-cov',
]

with open('requirements.txt') as f:
    REQUIRES = f.readlines()

setuptools.setup(
    name='configmap-converter',
    version='0.1.0',
    license="Apache License Version 2.0",
    description="Convert Kubernetes ConfigMaps to parameterized Helm templates",
    long_description="Extracts embedded controller manager configuration values "
                     "from ConfigMaps into values.yaml and generates Helm templates.",
    python_requires='>=3.8',
    packages=['configmap_converter'],
    py_modules=['convert'],
    entry_points={
        'console_scripts': ['configmap-converter=convert:main'],
    },
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        'Intended Audience :: Developers',
        'Programming Language :: Python :: 3',
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
    ],
    install_requires=REQUIRES,
    tests_require=TESTS_REQUIRES,
    extras_require={'test': TESTS_REQUIRES}
)
