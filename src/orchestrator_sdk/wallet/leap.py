from orchestrator_sdk.wallet.extension import ExtensionWalletAdapter


class LeapWalletAdapter(ExtensionWalletAdapter):
    """Leap exposes the same capability surface as Keplr."""
    name = "Leap"
    keystore_event = "leap_keystorechange"
