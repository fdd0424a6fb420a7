from setuptools import setup  # pragma: no cover

setup(  # pragma: no cover
    name='socialauth',
    version='0.1.0',
    packages=['socialauth', 'socialauth.oauth', 'socialauth.providers', 'socialauth.tests',
              'socialauth.tests.fixtures'],
    python_requires='>=3.10',
    install_requires=[
        'requests',
        'requests-oauthlib',
        'oauthlib>=3.0',
        'pystrict',
        'xxhash',
    ],
    extras_require={
        'test': ['pytest'],
    },
    url='',
    license='',
    author='',
    author_email='',
    description='OAuth 1.0a and OAuth 2 identity provider adapters with a normalized user record'
)
