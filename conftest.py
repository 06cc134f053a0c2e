import os
import sys

# Widget tests run without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Allow running the suite from a checkout without installing the package
sys.path.insert(0, os.path.join(os.path.abspath(os.path.dirname(__file__)), 'src'))
