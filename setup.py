from setuptools import setup, find_namespace_packages

setup(name='pysystems',
      version='0.1',
      description='Toolbox for continuous and discrete-time affine systems and their discretization',
      author='pysystems developers',
      license='MIT',
      packages=find_namespace_packages(include=['pysystems', 'pysystems.*']),
      keywords=[
          'affine systems',
          'discretization',
          'matrix exponential'
          ],
      install_requires=[
          'numpy',
          'scipy',
          'sympy'
      ],
      extras_require={
          'test': [
              'pytest'
          ]
      },
      zip_safe=False)
