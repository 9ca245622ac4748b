"""PsiFinance: gestão de consultório para psicólogos autônomos."""

__version__ = "0.1.0"
