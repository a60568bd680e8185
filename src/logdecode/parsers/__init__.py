"""Line decoders and the format registry."""
