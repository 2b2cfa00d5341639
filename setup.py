import os
from setuptools import setup


def local_path(*components):
  project_root = os.path.dirname(os.path.realpath(__file__))
  return os.path.normpath(os.path.join(project_root, *components))


def read_version():
  scope = {}
  with open(local_path("pyflowplan", "_version.py")) as version_file:
    exec(version_file.read(), scope)
  return scope["version"]


setup(name="pyflowplan",
      version=read_version(),
      author="Alexey Nazarenko",
      description="Static (HEFT) and dynamic (MinMin/MaxMin) workflow scheduling on heterogeneous resources",
      packages=["pyflowplan", "pyflowplan.planning", "pyflowplan.planning.algorithms"],
      python_requires=">=3.6",
      install_requires=["numpy", "networkx"],
      extras_require={"test": ["pytest"]})
