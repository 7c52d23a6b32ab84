from filehound.main import entrypoint

entrypoint()
