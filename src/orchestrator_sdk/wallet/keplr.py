from orchestrator_sdk.wallet.extension import ExtensionWalletAdapter


class KeplrWalletAdapter(ExtensionWalletAdapter):
    name = "Keplr"
    keystore_event = "keplr_keystorechange"
