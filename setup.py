import os
from setuptools import setup

def read(fname):
    with open(os.path.join(os.path.dirname(__file__), fname), encoding = 'utf-8') as f:
        return f.read()

setup(
    name = 'markrender',
    version = '0.1.0',
    description = 'Markdown to HTML with task lists, footnotes, math, highlighted code, diagrams and video thumbnails, using Python Markdown.',
    long_description = read('README.md'),
    long_description_content_type = 'text/markdown',
    license = 'MIT',
    keywords = 'markdown',
    python_requires = '>=3.9',
    install_requires = [
        'markdown>=3.6', 'pymdown-extensions', 'Pygments', 'latex2mathml'
    ],
    extras_require = {
        'test': ['pytest', 'PyHamcrest', 'lxml'],
    },
    packages = [
        'markrender', 'markrender.lib', 'markrender.ext', 'markrender.ext.util'
    ],
    entry_points = {
        'console_scripts': ['markrender=markrender.lib.cli:main'],
        'markdown.extensions': [
            'markrender.emoji = markrender.ext.emoji:EmojiExtension',
            'markrender.fenced_code = markrender.ext.fenced_code:FencedCodeExtension',
            'markrender.mark = markrender.ext.mark:MarkExtension',
            'markrender.math = markrender.ext.math:MathExtension',
            'markrender.normalise = markrender.ext.normalise:NormaliseExtension',
            'markrender.scripts = markrender.ext.scripts:ScriptsExtension',
            'markrender.tasklists = markrender.ext.tasklists:TaskListExtension',
            'markrender.video = markrender.ext.video:VideoExtension',
        ]
    },
    classifiers = [
        'Development Status :: 3 - Alpha',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Text Processing :: Markup :: Markdown',
    ]
)
