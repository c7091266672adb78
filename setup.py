from setuptools import setup, find_packages

setup(
    name='clusterclient',

    version='0.2.0',

    description='Python clients for the fleet, consul, docker and etcd HTTP APIs',

    author='Chris Nelson',
    author_email='cnelson@cnelson.org',

    license='Apache License (2.0)',

    classifiers=[
        'Development Status :: 3 - Alpha',

        'Topic :: Software Development :: Libraries',
        'Topic :: System :: Distributed Computing',
        'Topic :: System :: Clustering',

        'Intended Audience :: Developers',

        'License :: OSI Approved :: Apache Software License',

        'Programming Language :: Python :: 3',
    ],

    keywords='coreos fleet consul docker etcd api client',

    packages=find_packages(),

    package_data={
        'clusterclient.tests': ['fixtures/*'],
    },

    python_requires='>=3.6',

    install_requires=[
        'httplib2>=0.19',
        'paramiko>=2.7',
    ],

    extras_require={
        'test': [
            'google-api-python-client>=2.0',
            'mock',
            'pytest',
        ],
    },

    test_suite='clusterclient.tests'

)
