from dust_installer.main import cli

if __name__ == "__main__":
    cli()
