"""
Setup script for the Feedback Insights backend.
"""
from setuptools import setup, find_packages

setup(
    name='feedback-insights',
    version='2.0.0',
    description='Feedback Insights - AI categorization of pasted user feedback',
    packages=find_packages(exclude=['tests', 'tests.*']),
    py_modules=['config'],
    install_requires=[
        'Flask>=3.0.0',
        'Flask-CORS>=4.0.0',
        'python-dotenv>=1.0.0',
        'openai>=1.3.0',
        'supabase>=2.0.0',
        'postgrest>=0.13.0',
        'pydantic>=2.5.0',
        'limits>=3.6.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.4.0',
            'httpx>=0.23.0',
        ],
        'server': [
            'gunicorn>=21.2.0',
        ],
    },
    python_requires='>=3.9',
)
