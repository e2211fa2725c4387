from setuptools import setup, find_packages

setup(
    name='smart-translate',
    version='0.3.0',
    description='Translate or polish the selected text with OpenAI and paste it back',
    package_dir={'': 'src'},
    packages=find_packages('src'),
    package_data={'smart_translate': ['data/languages.json']},
    python_requires='>=3.10',
    install_requires=[
        'click',
        'pynput',
        'pyperclip',
        'python-dotenv',
        'requests',
    ],
    extras_require={
        'test': [
            'pytest>=8.2',
        ],
    },
    entry_points={
        'console_scripts': [
            'smart-translate=smart_translate.cli:cli',
        ],
    },
)
