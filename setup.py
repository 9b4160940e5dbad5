from setuptools import setup, find_packages
from setuptools.command.install_scripts import install_scripts as _install_scripts
from pathlib import Path
import os

# Custom command to modify the generated script
class CustomInstallScripts(_install_scripts):
    def run(self):
        super().run()  # Run the standard install_scripts command
        # Modify the installed scripts
        for script in self.get_outputs():
            if os.path.basename(script) == "gesturem":
                self.modify_script(script)

    def modify_script(self, script_path):
        # Replace the dynamic entry point resolution with direct import
        custom_content = (
            "#!/usr/bin/python3\n"
            "from gesturem.gesturem import main\n"
            "if __name__ == '__main__':\n"
            "    main()\n"
        )

        # Write the modified script
        with open(script_path, "w") as f:
            f.write(custom_content)
        print(f"Customized script: {script_path}")

description = "Music player controlled by gestures from a realtime database"
long_description = Path("README.md").read_text() if Path("README.md").exists() else description
from gesturem.version import VERSION

setup(
    name="gesturem",
    version=VERSION,
    description=description,
    long_description=long_description,
    author="HiFiBerry",
    author_email="support@hifiberry.com",
    packages=find_packages(exclude=["test"]),
    install_requires=[
        "bottle",
        "python-mpd2",
        "mutagen",
        "requests",
        "evdev",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-mock",
        ],
    },
    entry_points={
        "console_scripts": [
            "gesturem=gesturem.gesturem:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.7",
    include_package_data=True,
    cmdclass={"install_scripts": CustomInstallScripts},
)
